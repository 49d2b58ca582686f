"""Schema Package - JSON Schema Loading and Validation.

This package loads the JSON schemas used by the syndicator once at import
time and exposes them as module-level constants.

Available Schemas:
    JF2_POST_SCHEMA: JSON Schema for syndication requests
        A JF2 post record under "properties" plus an optional
        publication URL under "me". Draft 7.

Usage:
    from schema import JF2_POST_SCHEMA
    validate(instance=payload, schema=JF2_POST_SCHEMA)
"""
from .schema import JF2_POST_SCHEMA

__all__ = ["JF2_POST_SCHEMA"]
