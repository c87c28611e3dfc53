# treenorm/errors.py
from typing import Any
from pydantic import BaseModel


class NormalizeError(ValueError):
    """Base class for everything `normalize()` raises."""


class InvalidInput(NormalizeError):
    """The data handed to `normalize()` (or an entity inside it) has the wrong shape."""


class InvalidSchema(NormalizeError):
    """A schema descriptor is malformed or cannot resolve a value."""


class CyclicReferenceError(NormalizeError):
    """The input refers back to itself along the current descent path."""


class MergeConflict(BaseModel):
    """
    Diagnostic for two visits of the same entity that disagree on a field.
    Never raised; the merger keeps `kept` and logs this record.
    """
    entity_key: str
    field: str
    kept: Any = None
    discarded: Any = None

    def __str__(self) -> str:
        return (
            f"{self.entity_key}.{self.field}: "
            f"kept {self.kept!r}, discarded {self.discarded!r}"
        )
