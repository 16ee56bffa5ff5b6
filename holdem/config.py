from pydantic import BaseModel, Field


class EquityConfig(BaseModel):
    """Configuration for exact equity enumeration."""

    # Threads used for the top-level draw; 1 runs everything in the caller's thread
    max_workers: int = Field(default=1, ge=1)

    # Rank the last draw level in one vmapped batch instead of leaf by leaf
    batch_leaves: bool = True

    class Config:
        extra = "forbid"
