# treenorm/associations.py
"""
Reverse links for many-to-many relations declared on both sides.

If `authors` has a field named "books" and `books` has a field named
"authors", every book an author lists gets that author's id appended to its
own "authors" list, whether or not the input carried that direction.

Detection is by name only: the field must be spelled exactly like the other
entity's key. Relations named any other way get no reverse link and no
warning.
"""
import logging
from collections.abc import Hashable, Mapping
from typing import Any, Iterator, List, Tuple

from treenorm.schemas import Entity, Iterable, Union
from treenorm.types import Bag, EntityId

log = logging.getLogger(__name__)

Edge = Tuple[str, EntityId, str, EntityId]   # (parent key, parent id, child key, child id)


def iter_entity_schemas(schema: Any) -> Iterator[Entity]:
    """Every Entity reachable from `schema`, each once. Schema graphs may loop."""
    seen: set[int] = set()
    stack = [schema]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))

        match current:
            case Entity():
                yield current
                stack.extend(current.relations.values())
            case Union():
                stack.extend(current.item_schema.values())
            case Iterable():
                if current.is_polymorphic:
                    stack.extend(current.item_schema.values())
                else:
                    stack.append(current.item_schema)
            case Mapping():
                stack.extend(current.values())


def linked_pairs(schema: Any) -> List[Tuple[Entity, Entity]]:
    """Ordered (S, T) pairs where S has a field named T.key and T one named S.key."""
    entities = list(iter_entity_schemas(schema))
    pairs: List[Tuple[Entity, Entity]] = []
    seen: set[Tuple[str, str]] = set()   # one scan per bag table, however many descriptors share a key
    for s in entities:
        for t in entities:
            if s.key == t.key or (s.key, t.key) in seen:
                continue
            if t.key in s and s.key in t:
                seen.add((s.key, t.key))
                pairs.append((s, t))
    return pairs


def _child_ids(value: Any) -> Iterator[EntityId]:
    if isinstance(value, Mapping):
        items = value.values()
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    for item in items:
        # polymorphic tags and other non-id values carry no plain forward edge
        if item is not None and isinstance(item, Hashable):
            yield item


def collect_edges(bag: Bag, pairs: List[Tuple[Entity, Entity]]) -> List[Edge]:
    edges: List[Edge] = []
    for s, t in pairs:
        children = bag.get(t.key, {})
        for pid, parent in bag.get(s.key, {}).items():
            if t.key not in parent:
                continue
            for cid in _child_ids(parent[t.key]):
                if cid in children:
                    edges.append((s.key, pid, t.key, cid))
    return edges


def link_associations(bag: Bag, schema: Any) -> Bag:
    """
    Append each parent's id to its children's reciprocal field, in place.

    Forward edges are read for every pair before anything is written, so a
    link added for (S, T) is never picked up again as an edge of (T, S).
    Ids are not de-duplicated; an edge present in both directions of the
    input shows up twice. A reciprocal field holding a mapping (a values_of
    relation) is left as it is and a warning is logged.
    """
    edges = collect_edges(bag, linked_pairs(schema))
    for parent_key, pid, child_key, cid in edges:
        child = bag[child_key][cid]
        backlinks = child.get(parent_key)
        if isinstance(backlinks, Mapping):
            # keyed backlinks have no slot for a synthesized id
            log.warning(
                "not linking %s[%r].%s <- %r: field holds a mapping, not a list",
                child_key, cid, parent_key, pid,
            )
            continue
        if isinstance(backlinks, list):
            backlinks.append(pid)
        elif isinstance(backlinks, tuple):
            child[parent_key] = [*backlinks, pid]
        elif backlinks is None:
            child[parent_key] = [pid]
        else:
            child[parent_key] = [backlinks, pid]
        log.debug("linked %s[%r].%s <- %r", child_key, cid, parent_key, pid)
    return bag
