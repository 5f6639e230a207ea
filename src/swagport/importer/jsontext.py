"""JSON text helpers for fields the canonical model stores as strings."""

from __future__ import annotations

import copy
import json
from typing import Any, Optional

EXAMPLE_INDENT = 4


def stringify(value: Any, indent: Optional[int] = None) -> Optional[str]:
    """Render *value* as text.

    Strings pass through unchanged and ``None`` stays ``None``; anything
    else becomes JSON, compact unless *indent* is given.
    """
    if value is None or isinstance(value, str):
        return value
    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)


def hoist_example(schema: dict[str, Any]) -> tuple[dict[str, Any], Optional[str]]:
    """Split a top-level ``example`` off a copy of *schema*.

    Returns:
        ``(schema_without_example, example_text)``; the text is ``None`` when
        the schema declares no example. *schema* itself is left untouched.
    """
    retained = copy.deepcopy(schema)
    if "example" not in retained:
        return retained, None
    example = retained.pop("example")
    return retained, stringify(example, EXAMPLE_INDENT)
