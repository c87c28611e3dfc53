# treenorm/visitor.py
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Dict

from treenorm import settings
from treenorm.errors import CyclicReferenceError, InvalidInput
from treenorm.merge import default_assign_entity, default_merge_into_entity
from treenorm.schemas import Entity, Iterable, Union, is_schema
from treenorm.types import AssignEntity, Bag, EntityId, MergeIntoEntity


def is_composite(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


class Visitor:
    """
    One recursive descent over a value and its schema.

    Returns the normalized replacement for each value and writes every entity
    it meets into `bag`. A Visitor belongs to exactly one `normalize()` call.
    """
    def __init__(self, bag: Bag, assign_entity: AssignEntity | None = None,
                 merge_into_entity: MergeIntoEntity | None = None,
                 detect_cycles: bool = settings.DETECT_CYCLES):
        self.bag = bag
        self.assign_entity = assign_entity or default_assign_entity
        self.merge_into_entity = merge_into_entity or default_merge_into_entity
        self.detect_cycles = detect_cycles
        self._path: set[int] = set()   # id() of composites on the current descent path

    def visit(self, value: Any, schema: Any) -> Any:
        # base case: scalars, and values nothing describes
        if not is_composite(value) or not is_schema(schema):
            return value

        with self._entered(value, schema):
            return self._dispatch(value, schema)

    @contextmanager
    def _entered(self, value: Any, schema: Any):
        if not self.detect_cycles:
            yield
            return
        marker = id(value)
        if marker in self._path:
            raise CyclicReferenceError(
                f"value of type {type(value).__name__} contains itself (schema {schema!r})"
            )
        self._path.add(marker)
        try:
            yield
        finally:
            self._path.discard(marker)

    def _dispatch(self, value: Any, schema: Any) -> Any:
        match schema:
            case Entity():
                return self.visit_entity(value, schema)
            case Iterable():
                return self.visit_iterable(value, schema)
            case Union():
                return self.visit_polymorphic(value, schema)
            case _:
                return self.visit_structure(value, schema)

    # --- per-kind visitors ---

    def visit_structure(self, value: Any, schema: Mapping) -> Any:
        """Copy `value`, recursing into the fields `schema` names."""
        if not isinstance(value, Mapping):
            return [self.visit(item, schema.get(i)) for i, item in enumerate(value)]

        normalized: Dict[Any, Any] = {}
        for key, item in value.items():
            self.assign_entity(normalized, key, self.visit(item, schema.get(key)))
        return normalized

    def visit_iterable(self, value: Any, schema: Iterable) -> Any:
        def visit_item(item):
            if not schema.is_polymorphic:
                return self.visit(item, schema.item_schema)
            if not is_composite(item):
                return item
            with self._entered(item, schema):
                return self.visit_polymorphic(item, schema)

        if isinstance(value, Mapping):
            return {key: visit_item(item) for key, item in value.items()}
        return [visit_item(item) for item in value]

    def visit_polymorphic(self, value: Any, schema: Iterable | Union) -> Dict[str, Any]:
        schema_key, item_schema = schema.resolve(value)
        return {
            settings.ID_TAG_KEY: self._dispatch(value, item_schema),
            settings.SCHEMA_TAG_KEY: schema_key,
        }

    def visit_entity(self, value: Any, schema: Entity) -> EntityId:
        """Store the entity under bag[key][id] and hand back its id."""
        if not isinstance(value, Mapping):
            raise InvalidInput(f"{schema.key}: expected a mapping, got {type(value).__name__}")

        entity_id = schema.get_id(value)
        table = self.bag.setdefault(schema.key, {})
        normalized = self.visit_structure(value, schema.relations)

        if entity_id not in table:
            # defaults are a fallback, not first-seen data: overlay without merging
            record = schema.template()
            record.update(normalized)
            table[entity_id] = record
        else:
            merge = schema.merge_strategy or self.merge_into_entity
            merge(table[entity_id], normalized, schema.key)
        return entity_id
