from .base import is_schema, kind_of
from .entity import Entity
from .iterable import Iterable
from .union import Union


def array_of(schema, schema_attribute=None) -> Iterable:
    """A list of `schema` items (or, with `schema_attribute`, of polymorphic items)."""
    return Iterable(schema, schema_attribute=schema_attribute)


def values_of(schema, schema_attribute=None) -> Iterable:
    """A dict whose values are `schema` items; keys are kept as-is."""
    return Iterable(schema, schema_attribute=schema_attribute)


def union_of(schemas, schema_attribute=None) -> Union:
    return Union(schemas, schema_attribute=schema_attribute)


# Older name for Entity
Schema = Entity


__all__ = [
    "Schema",
    "Entity",
    "Iterable",
    "Union",
    "array_of",
    "values_of",
    "union_of",
    "is_schema",
    "kind_of",
]
