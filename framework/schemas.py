from pydantic import BaseModel, ConfigDict, Field


class FailedItem(BaseModel):
    """One failed unit of work from a bounded fan-out run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    index: int = Field(ge=0, description="Position of the failed item in the input sequence")
    error: BaseException = Field(description="Exception raised by the worker for this item")
