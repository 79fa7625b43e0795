"""Base model for domain records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable record loaded from or written to a store.

    Changes go through ``model_copy(update=...)`` so a value handed out by a
    repository is never mutated behind the caller's back.
    """

    model_config = ConfigDict(frozen=True)
