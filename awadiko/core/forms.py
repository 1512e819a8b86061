"""Helpers for turning posted form fields into validated input."""
import json
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

_INDEXED_FIELD = re.compile(r"^(?P<prefix>\w+)\[(?P<index>\d+)\]\.(?P<field>\w+)$")


def form_value(form: Mapping[str, Any], key: str) -> Optional[str]:
    """Form field as a string, ``None`` when absent."""
    value = form.get(key)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def parse_json_list(raw: Any) -> List[str]:
    """
    Decode a stringified JSON list such as ``'["Botany", "Law"]'``.

    Unparsable or non-list input yields an empty list.
    """
    if isinstance(raw, list):
        values = raw
    else:
        try:
            values = json.loads(raw) if raw else []
        except (TypeError, ValueError):
            return []
    if not isinstance(values, list):
        return []
    return [str(v) for v in values if v is not None]


def parse_indexed_rows(form: Mapping[str, Any], prefix: str) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Collect flattened ``prefix[i].field`` entries into ``(i, row)`` pairs ordered by index.

    Gaps in the index sequence are skipped; each row keeps its posted index.
    """
    rows: Dict[int, Dict[str, Any]] = {}
    for key in form.keys():
        match = _INDEXED_FIELD.match(key)
        if not match or match.group("prefix") != prefix:
            continue
        index = int(match.group("index"))
        rows.setdefault(index, {})[match.group("field")] = form.get(key)
    return [(i, rows[i]) for i in sorted(rows)]


def field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Flatten pydantic errors into ``{field: [message, ...]}``."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "__root__"
        if error["type"] == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])
        else:
            message = error["msg"]
        errors.setdefault(field, []).append(message)
    return errors
