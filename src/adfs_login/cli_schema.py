"""Schema describing the fields shown in CLI tables."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueFormatter = Callable[[Any], str]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    key: str
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value = row.get(self.key)
        if value is None:
            return ""
        if self.formatter:
            return self.formatter(value)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]


def mask_secret(value: Any) -> str:
    text = str(value)
    if not text:
        return ""
    return "*" * min(len(text), 8)


def _source_formatter(value: Any) -> str:
    return str(value) if value else "missing"


SETTINGS_VIEW = TableView(
    title="ADFS login settings",
    columns=(
        Column("Setting", "setting"),
        Column("Value", "value"),
        Column("Source", "source", formatter=_source_formatter),
    ),
)


def settings_rows(values: Mapping[str, str], sources: Mapping[str, str]) -> list[dict[str, str]]:
    """Build table rows, masking the password."""

    rows: list[dict[str, str]] = []
    for name in ("username", "hostname", "password"):
        value = values.get(name, "")
        if name == "password":
            value = mask_secret(value)
        rows.append({"setting": name, "value": value, "source": sources.get(name, "")})
    return rows
