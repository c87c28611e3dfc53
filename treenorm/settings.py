# treenorm/settings.py
import os

# Field read for an entity's id when the schema does not say otherwise
DEFAULT_ID_ATTRIBUTE = "id"

# Keys of the tag that replaces a polymorphic value: {"id": ..., "schema": ...}
ID_TAG_KEY = "id"
SCHEMA_TAG_KEY = "schema"

LOG_LEVEL = os.getenv("TREENORM_LOG_LEVEL", "INFO")

# Fail with CyclicReferenceError instead of recursing until the stack runs out
DETECT_CYCLES = os.getenv("TREENORM_DETECT_CYCLES", "true").lower() in ("1", "true", "yes")
