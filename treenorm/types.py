# treenorm/types.py
from enum import Enum
from typing import Any, Callable, Dict, Hashable

Record = Dict[str, Any]          # one flat entity record (field -> value)
EntityId = Hashable              # whatever the id rule yields; used as the bag key
Bag = Dict[str, Dict[EntityId, Record]]   # entity key -> id -> record

AssignEntity = Callable[[Dict[Any, Any], Any, Any], None]
MergeIntoEntity = Callable[[Record, Record, str], None]


class SchemaKind(Enum):
    ENTITY = "entity"
    ITERABLE = "iterable"
    UNION = "union"
    STRUCTURAL = "structural"   # a plain dict of field -> child schema
