from __future__ import annotations

from typing import Any, Dict, List, Optional


class MalformedPayload(ValueError):
    """A successful response whose body does not have the documented shape."""


def list_field(body: Dict[str, Any], key: str) -> List[Any]:
    """Return body[key] as a list. A missing or null key is an empty list."""

    value = body.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedPayload(f"{key!r} is {type(value).__name__}, expected list")
    return value


def names(items: List[Any], key: str) -> tuple[str, ...]:
    """Flatten [{name: ...}, ...] into a tuple of names, dropping blanks."""

    out: List[str] = []
    for item in items:
        if not isinstance(item, dict):
            raise MalformedPayload(f"{key!r} entry is {type(item).__name__}, expected object")
        name = item.get("name")
        if name is None or not str(name).strip():
            continue
        out.append(str(name).strip())
    return tuple(out)


def optional_str(value: Any) -> Optional[str]:
    """Normalize optional text fields: None and blank strings become None."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def flag(value: Any) -> bool:
    """Lock flags arrive as booleans, 0/1 or "true"/"false" depending on the backend revision."""

    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)
