"""Base model class for all value models."""

from pydantic import BaseModel, ConfigDict


class ValueModel(BaseModel):
    """Immutable base model; instances are safe to share between readers."""

    model_config = ConfigDict(frozen=True, from_attributes=True)
