# treenorm/schemas/iterable.py
from typing import Any

from treenorm.errors import InvalidSchema
from treenorm.types import SchemaKind
from .base import PolymorphicSchema, Selector, is_schema


class Iterable:
    """
    A collection (list or dict of values) whose items share one schema, or,
    with `schema_attribute`, whose items each pick a schema from a mapping.
    """
    kind = SchemaKind.ITERABLE

    def __init__(self, item_schema: Any, schema_attribute: str | Selector | None = None):
        if schema_attribute is None:
            if not is_schema(item_schema):
                raise InvalidSchema(f"item schema must be a schema or a polymorphic mapping, got {item_schema!r}")
            self._item_schema = item_schema
            self._polymorphic = None
        else:
            self._polymorphic = PolymorphicSchema(item_schema, schema_attribute)
            self._item_schema = self._polymorphic.schemas

    def __repr__(self):
        return f"<Iterable(item_schema={self._item_schema!r}, polymorphic={self.is_polymorphic})>"

    @property
    def item_schema(self) -> Any:
        return self._item_schema

    @property
    def is_polymorphic(self) -> bool:
        return self._polymorphic is not None

    def resolve(self, value: Any) -> tuple[Any, Any]:
        """(schema key, schema) for one item of a polymorphic collection."""
        if self._polymorphic is None:
            raise InvalidSchema("resolve() is only defined for polymorphic iterables")
        return self._polymorphic.resolve(value)
