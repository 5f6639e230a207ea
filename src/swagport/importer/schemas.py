"""Map named ``definitions`` onto canonical schemas."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from swagport.importer.jsontext import hoist_example
from swagport.models import Schema

EXTENSION_PREFIX = "x-"


def map_schemas(definitions: Optional[Mapping[str, Any]]) -> list[Schema]:
    """Build one :class:`~swagport.models.Schema` per named definition.

    The schema is named after the definition's ``title`` when it has one,
    else after its key. Top-level ``x-`` extension properties are dropped
    and a top-level ``example`` is moved to :attr:`Schema.example`. The
    source definitions are not modified.
    """
    schemas = []
    for key, definition in (definitions or {}).items():
        if not isinstance(definition, dict):
            continue
        retained = {
            prop: value
            for prop, value in definition.items()
            if not str(prop).startswith(EXTENSION_PREFIX)
        }
        title = retained.pop("title", None)
        retained, example = hoist_example(retained)
        schemas.append(
            Schema(name=str(title) if title else str(key), definition=retained, example=example)
        )
    return schemas
