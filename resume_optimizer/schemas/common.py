from __future__ import annotations

from typing import Any


def empty_list_if_none(value: Any) -> Any:
    return [] if value is None else value


def empty_str_if_none(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return value
