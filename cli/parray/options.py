from __future__ import annotations

from typing import Any, List, Literal, Optional

OutputFormat = Literal["text", "json"]


def coerce_literal(raw: str) -> Any:
    """Interpret a command-line token as an int, then a float, else keep the string."""

    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            continue
    return raw


def coerce_literals(raw: Optional[List[str]]) -> List[Any]:
    if not raw:
        return []
    return [coerce_literal(token) for token in raw]


def resolve_format(value: str) -> OutputFormat:
    lowered = value.strip().lower()
    if lowered not in ("text", "json"):
        raise ValueError(f"Unsupported format '{value}'. Expected 'text' or 'json'.")
    return lowered  # type: ignore[return-value]


__all__ = ["OutputFormat", "coerce_literal", "coerce_literals", "resolve_format"]
