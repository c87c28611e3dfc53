# treenorm/merge.py
import logging
from typing import Any, Dict

from treenorm.errors import MergeConflict
from treenorm.types import Record

log = logging.getLogger(__name__)


def default_assign_entity(output: Dict[Any, Any], key: Any, value: Any) -> None:
    """Place a normalized field on its parent. Callers can swap this to rename or drop fields."""
    output[key] = value


def default_merge_into_entity(existing: Record, incoming: Record, entity_key: str) -> None:
    """
    Fold a newly visited copy of an entity into the stored record, in place.

    A field is taken from `incoming` when the stored record lacks it or
    already holds an equal value. When both hold different values the first
    one stays and a MergeConflict is logged; the call carries on.
    """
    for field, value in incoming.items():
        if field not in existing or existing[field] == value:
            existing[field] = value
            continue

        conflict = MergeConflict(
            entity_key=entity_key,
            field=field,
            kept=existing[field],
            discarded=value,
        )
        log.warning(
            "unequal data when merging two %s on %r; keeping the earlier value: %r (discarded %r)",
            entity_key, field, existing[field], value,
            extra={"conflict": conflict},
        )
