"""Shared base for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen pydantic model used by comments, votes and threads.

    Cached thread maps are shared between requests, so entities are
    never mutated in place: changes go through ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)
