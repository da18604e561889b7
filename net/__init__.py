"""Bounded-concurrency URL fetching built on the fan-out runner."""

from .fetcher import fetch_all, fetch_url

__all__ = [
    "fetch_all",
    "fetch_url",
]
