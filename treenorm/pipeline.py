# treenorm/pipeline.py
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from treenorm.associations import link_associations
from treenorm.errors import InvalidInput, InvalidSchema, NormalizeError
from treenorm.schemas import is_schema
from treenorm.types import Bag
from treenorm.visitor import Visitor

log = logging.getLogger(__name__)


class NormalizeOptions(BaseModel):
    """Per-call hooks. Leaving one unset uses the default in treenorm.merge."""
    model_config = ConfigDict(extra="forbid")

    assign_entity: Optional[Callable[[Dict[Any, Any], Any, Any], None]] = None
    merge_into_entity: Optional[Callable[[Dict[str, Any], Dict[str, Any], str], None]] = None


def _coerce_options(options) -> NormalizeOptions:
    if options is None:
        return NormalizeOptions()
    if isinstance(options, NormalizeOptions):
        return options
    if not isinstance(options, Mapping):
        raise NormalizeError(f"normalize options must be a mapping, got {type(options).__name__}")
    try:
        return NormalizeOptions.model_validate(dict(options))
    except ValidationError as e:
        raise NormalizeError(f"invalid normalize options: {e}") from e


def normalize(data: Any, schema: Any, options: NormalizeOptions | Mapping | None = None) -> Dict[str, Any]:
    """
    Flatten `data` according to `schema`.

    Returns {"result": ..., "entities": ...}:
      - result: `data`'s shape with every entity replaced by its id and every
        polymorphic value by {"id": ..., "schema": ...}
      - entities: entity key -> id -> merged record

    Raises InvalidInput when `data` is not a dict or list, InvalidSchema when
    `schema` is not a mapping or schema descriptor. Each call starts from an
    empty bag; nothing is kept between calls.
    """
    if not isinstance(data, (Mapping, list, tuple)):
        raise InvalidInput(f"normalize accepts a dict or a list as its input, got {type(data).__name__}")
    if isinstance(schema, (list, tuple)) or not is_schema(schema):
        raise InvalidSchema(f"normalize accepts a mapping or a schema descriptor, got {type(schema).__name__}")

    opts = _coerce_options(options)
    bag: Bag = {}
    visitor = Visitor(bag, assign_entity=opts.assign_entity, merge_into_entity=opts.merge_into_entity)

    result = visitor.visit(data, schema)
    entities = link_associations(bag, schema)

    log.debug("normalized %s", {key: len(table) for key, table in entities.items()} or "no entities")
    return {"result": result, "entities": entities}
