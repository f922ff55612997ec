"""Helpers for list-valued settings read from the environment."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

# settings fields whose env value may be a JSON array or a comma-separated string
STRING_LIST_FIELDS = frozenset({"cors_origins"})


def _parse_json_list(text: str) -> list[str]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON array: {e}") from e
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ValueError("JSON value must be an array of strings")
    return parsed


def parse_string_list(value: str | list[str], *, allow_empty: bool = False) -> list[str]:
    """Turn a list, a JSON array string or a comma-separated string into a list of strings.

    An empty string is always rejected; an empty resulting list is rejected
    unless allow_empty is set.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("String list value must not be empty")
        if text.startswith("["):
            items = _parse_json_list(text)
        else:
            items = [part.strip() for part in text.split(",") if part.strip()]
    else:
        items = value

    if not items and not allow_empty:
        raise ValueError("String list value must not be empty")
    return items


class StringListEnvSettingsSource(EnvSettingsSource):
    """Env source that hands string-list fields to validators unparsed.

    pydantic-settings would otherwise try to JSON-decode list fields itself and
    fail on comma-separated values before parse_string_list gets to run.
    """

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in STRING_LIST_FIELDS and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
