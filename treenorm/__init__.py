from .pipeline import normalize, NormalizeOptions
from .schemas import Entity, Schema, Iterable, Union, array_of, values_of, union_of
from .merge import default_assign_entity, default_merge_into_entity
from .errors import NormalizeError, InvalidInput, InvalidSchema, CyclicReferenceError, MergeConflict

__version__ = "0.1.0"

__all__ = [
    "normalize",
    "NormalizeOptions",
    "Entity",
    "Schema",
    "Iterable",
    "Union",
    "array_of",
    "values_of",
    "union_of",
    "default_assign_entity",
    "default_merge_into_entity",
    "NormalizeError",
    "InvalidInput",
    "InvalidSchema",
    "CyclicReferenceError",
    "MergeConflict",
]
