# treenorm/schemas/base.py
from typing import Any, Callable, Mapping

from treenorm.errors import InvalidSchema
from treenorm.types import SchemaKind

Selector = Callable[[Any], Any]


def kind_of(obj: Any) -> SchemaKind | None:
    """
    Classify a schema: descriptors report their own kind, a plain mapping of
    field -> child schema is STRUCTURAL, anything else is not a schema (None).
    """
    kind = getattr(obj, "kind", None)
    if isinstance(kind, SchemaKind):
        return kind
    if isinstance(obj, Mapping):
        return SchemaKind.STRUCTURAL
    return None


def is_schema(obj: Any) -> bool:
    return kind_of(obj) is not None


def make_selector(attribute: str | Selector) -> Selector:
    """Turn a field name or a callable into a `value -> schema key` function."""
    if callable(attribute):
        return attribute
    if isinstance(attribute, str) and attribute:
        return lambda value: value.get(attribute) if isinstance(value, Mapping) else None
    raise InvalidSchema(f"schema_attribute must be a field name or a callable, got {attribute!r}")


class PolymorphicSchema:
    """
    Shared part of polymorphic iterables and unions:
    a mapping of schema key -> schema, plus a selector choosing one per value.
    """
    def __init__(self, schemas: Mapping[Any, Any], schema_attribute: str | Selector):
        if not isinstance(schemas, Mapping) or not schemas:
            raise InvalidSchema("a polymorphic schema needs a non-empty mapping of schema key -> schema")
        for k, s in schemas.items():
            if not is_schema(s):
                raise InvalidSchema(f"polymorphic member {k!r} is not a schema: {s!r}")
        self._schemas = dict(schemas)
        self._select = make_selector(schema_attribute)

    @property
    def schemas(self) -> Mapping[Any, Any]:
        return dict(self._schemas)

    def get_schema_key(self, value: Any) -> Any:
        return self._select(value)

    def resolve(self, value: Any) -> tuple[Any, Any]:
        """Return (schema key, schema) for one value."""
        key = self.get_schema_key(value)
        try:
            return key, self._schemas[key]
        except (KeyError, TypeError):
            raise InvalidSchema(
                f"no schema registered under {key!r} (known: {sorted(map(repr, self._schemas))})"
            ) from None
