"""
Tables
Column schemas, sorting, pagination and row actions for list pages.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from bootcamp.config import PAGE_SIZE

Path = Union[str, Sequence[str]]
Record = Dict[str, Any]


def get_value(record: Record, path: Optional[Path]):
    """Read a field by name, dotted path or sequence of keys."""
    if path is None:
        return None
    keys = path.split('.') if isinstance(path, str) else list(path)
    value = record
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


# =============================================================================
# SORTERS (sort keys)
# =============================================================================

def string_sorter(path: Path) -> Callable[[Record], str]:
    return lambda record: str(get_value(record, path) or '').lower()


def number_sorter(path: Path) -> Callable[[Record], float]:
    return lambda record: get_value(record, path) or 0


# =============================================================================
# RENDERERS
# =============================================================================

def bool_renderer(value, record=None) -> str:
    return '' if value is None else str(bool(value)).lower()


def bool_icon_renderer(value, record=None) -> str:
    return '✔' if value else '✖'


def tags_renderer(values, record=None) -> str:
    return ', '.join(values or [])


def date_renderer(value, record=None) -> str:
    parsed = parse_iso(value)
    return parsed.strftime('%Y-%m-%d') if parsed else ''


def string_trim_renderer(value, record=None, length: int = 20) -> str:
    if not value:
        return ''
    return value if len(value) <= length else f"{value[:length]}..."


def id_from_array_renderer(items: Iterable[Record]) -> Callable:
    """Show the name of the item whose id matches the cell value."""
    names = {item.get('id'): item.get('name') for item in items}

    def render(value, record=None):
        return names.get(value, value)
    return render


# =============================================================================
# COLUMNS
# =============================================================================

@dataclass
class Column:
    title: str
    data_index: Optional[Path] = None
    sorter: Optional[Callable[[Record], Any]] = None
    render: Optional[Callable[..., Any]] = None
    key: Optional[str] = None

    def __post_init__(self):
        if self.key is None:
            if isinstance(self.data_index, str):
                self.key = self.data_index
            elif self.data_index:
                self.key = '.'.join(self.data_index)
            else:
                self.key = self.title.lower()

    def cell(self, record: Record):
        value = get_value(record, self.data_index)
        if self.render:
            return self.render(value, record)
        return value


@dataclass
class RowAction:
    """
    A link in the actions column. `when` hides the action for records it
    rejects, e.g. Expel for already expelled students.
    """
    name: str
    callback: Callable[[Record], Any]
    when: Optional[Callable[[Record], bool]] = None

    def available(self, record: Record) -> bool:
        return self.when is None or bool(self.when(record))


class ActionColumn(Column):

    def __init__(self, actions: List[RowAction], title: str = 'Actions'):
        super().__init__(title=title, key='actions')
        self.actions = actions

    def cell(self, record: Record) -> List[str]:
        return [a.name for a in self.actions if a.available(record)]

    def action(self, name: str) -> Optional[RowAction]:
        return next((a for a in self.actions if a.name == name), None)


# =============================================================================
# TABLE
# =============================================================================

class Table:
    """
    Paginated, sortable rows over a collection.

    The table never mutates the records it is given; row actions hand the
    record back to whoever registered the callback.
    """

    def __init__(self, columns: List[Column], page_size: int = PAGE_SIZE, row_key: Union[str, Callable] = 'id'):
        self.columns = columns
        self.page_size = page_size
        self.row_key = row_key

    def column(self, key: str) -> Optional[Column]:
        return next((c for c in self.columns if c.key == key), None)

    def key_of(self, record: Record):
        if callable(self.row_key):
            return self.row_key(record)
        return get_value(record, self.row_key)

    def sort(self, records: List[Record], column_key: str, descending: bool = False) -> List[Record]:
        column = self.column(column_key)
        if column is None or column.sorter is None:
            raise ValueError(f"Column '{column_key}' is not sortable")
        return sorted(records, key=column.sorter, reverse=descending)

    def page_count(self, records: List[Record]) -> int:
        return max(1, math.ceil(len(records) / self.page_size))

    def page(self, records: List[Record], number: int = 1) -> List[Record]:
        start = (number - 1) * self.page_size
        return records[start:start + self.page_size]

    def rows(self, records: List[Record], page: int = 1,
             sort_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        """Rendered rows: {'key': row key, 'cells': {column key: value}}."""
        if sort_by:
            records = self.sort(records, sort_by, descending)
        return [
            {'key': self.key_of(r), 'cells': {c.key: c.cell(r) for c in self.columns}}
            for r in self.page(records, page)
        ]

    def trigger(self, action_name: str, record: Record):
        """Fire a row action as if its link was clicked."""
        for column in self.columns:
            if isinstance(column, ActionColumn):
                action = column.action(action_name)
                if action and action.available(record):
                    return action.callback(record)
        raise ValueError(f"No '{action_name}' action for row {self.key_of(record)}")
