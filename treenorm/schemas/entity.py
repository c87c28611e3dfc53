# treenorm/schemas/entity.py
from collections.abc import Hashable
from copy import deepcopy
from types import MappingProxyType
from typing import Any, Callable, Mapping

from treenorm import settings
from treenorm.errors import InvalidInput, InvalidSchema
from treenorm.types import EntityId, MergeIntoEntity, Record, SchemaKind
from .base import is_schema


class Entity:
    """
    Descriptor for one entity type.

    `key` names the flat table the entity lands in, `id_attribute` says how to
    read its id (field name or callable), `defaults` seeds every new record and
    `merge_strategy` overrides how repeated visits of one id are combined.

    Relation fields are attached after construction, which lets two entity
    types refer to each other:

        user = Entity("users")
        article = Entity("articles")
        article.define({"author": user})
        user.define({"articles": array_of(article)})
    """
    kind = SchemaKind.ENTITY

    def __init__(
        self,
        key: str,
        id_attribute: str | Callable[[Record], EntityId] = settings.DEFAULT_ID_ATTRIBUTE,
        defaults: Mapping[str, Any] | None = None,
        merge_strategy: MergeIntoEntity | None = None,
    ):
        if not key or not isinstance(key, str):
            raise InvalidSchema("an entity schema needs a non-empty string key")
        if not (callable(id_attribute) or (isinstance(id_attribute, str) and id_attribute)):
            raise InvalidSchema(f"{key}: id_attribute must be a field name or a callable")
        if defaults is not None and not isinstance(defaults, Mapping):
            raise InvalidSchema(f"{key}: defaults must be a mapping")
        if merge_strategy is not None and not callable(merge_strategy):
            raise InvalidSchema(f"{key}: merge_strategy must be callable")

        self._key = key
        self._id_attribute = id_attribute
        self._defaults = dict(defaults or {})
        self._merge_strategy = merge_strategy
        self._relations: dict[str, Any] = {}

    def __repr__(self):
        return f"<Entity(key={self._key!r}, relations={list(self._relations)})>"

    @property
    def key(self) -> str:
        return self._key

    @property
    def merge_strategy(self) -> MergeIntoEntity | None:
        return self._merge_strategy

    @property
    def relations(self) -> Mapping[str, Any]:
        """Read-only view of field name -> child schema."""
        return MappingProxyType(self._relations)

    # --- relation declaration ---

    def define(self, relations: Mapping[str, Any]) -> "Entity":
        for field, schema in relations.items():
            self[field] = schema
        return self

    def __setitem__(self, field: str, schema: Any):
        if not is_schema(schema):
            raise InvalidSchema(f"{self._key}.{field}: {schema!r} is not a schema")
        self._relations[field] = schema

    def __getitem__(self, field: str) -> Any:
        return self._relations[field]

    def __contains__(self, field: object) -> bool:
        return field in self._relations

    def get(self, field: str, default: Any = None) -> Any:
        return self._relations.get(field, default)

    # --- per-value helpers ---

    def get_id(self, value: Mapping[str, Any]) -> EntityId:
        if callable(self._id_attribute):
            entity_id = self._id_attribute(value)
        else:
            entity_id = value.get(self._id_attribute)
        if entity_id is None:
            raise InvalidInput(f"{self._key}: entity has no id ({value!r})")
        if not isinstance(entity_id, Hashable):
            raise InvalidInput(f"{self._key}: id {entity_id!r} is not a hashable scalar")
        return entity_id

    def template(self) -> Record:
        """A fresh copy of the defaults; records never share the schema's dict."""
        return deepcopy(self._defaults)
