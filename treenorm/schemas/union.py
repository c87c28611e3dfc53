# treenorm/schemas/union.py
from typing import Any, Mapping

from treenorm.errors import InvalidSchema
from treenorm.types import SchemaKind
from .base import PolymorphicSchema, Selector


class Union:
    """A single reference whose concrete schema is chosen per value."""
    kind = SchemaKind.UNION

    def __init__(self, schemas: Mapping[Any, Any], schema_attribute: str | Selector | None = None):
        if schema_attribute is None:
            raise InvalidSchema("a union schema requires schema_attribute")
        self._polymorphic = PolymorphicSchema(schemas, schema_attribute)

    def __repr__(self):
        return f"<Union(schemas={list(self._polymorphic.schemas)})>"

    @property
    def item_schema(self) -> Mapping[Any, Any]:
        return self._polymorphic.schemas

    def resolve(self, value: Any) -> tuple[Any, Any]:
        return self._polymorphic.resolve(value)
