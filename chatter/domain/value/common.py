"""Shared base for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared field by field.

    Actors are hashed into sets of capabilities and passed across
    services, so they must never change after construction.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
