"""Base model configuration for all API value objects."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Frozen model that ignores fields the API adds over time."""

    model_config = ConfigDict(frozen=True, extra="ignore")
