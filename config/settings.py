import os
from dotenv import load_dotenv

load_dotenv()

# Fan-out defaults
FETCH_MAX_CONCURRENCY = int(os.getenv("FETCH_MAX_CONCURRENCY", "5"))

# HTTP client used by the default fetch operation
HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "12.0"))
HTTP_CONNECT_TIMEOUT_S = float(os.getenv("HTTP_CONNECT_TIMEOUT_S", "8.0"))
HTTP_USER_AGENT = os.getenv("HTTP_USER_AGENT", "fanout-fetch/0.1 (+https://www.python-httpx.org)")

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")  # DEBUG | INFO | WARNING | ERROR
