"""
List Page
A list editor wired to a modal form and a table.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from bootcamp.client.forms import Form, ModalForm
from bootcamp.client.list_editor import ListEditor, Notifier, Projection
from bootcamp.client.record_service import Record, RecordService
from bootcamp.client.tables import Column, Table

logger = logging.getLogger(__name__)


class ListPage:
    """
    Base for admin pages that edit a collection in a modal.

    Subclasses provide the form, the columns and the payload projection.
    """

    title = ''
    form_title = ''

    def __init__(self, service: RecordService, project: Projection,
                 notify: Optional[Notifier] = None, **editor_options):
        self.editor = ListEditor(service, project, notify=notify, **editor_options)
        self.modal = ModalForm(self.build_form(), self.editor)

    # Subclass hooks

    def build_form(self) -> Form:
        raise NotImplementedError

    def get_columns(self) -> List[Column]:
        raise NotImplementedError

    # Wiring

    @property
    def notify(self) -> Callable[[str], None]:
        return self.editor.notify

    @property
    def records(self) -> List[Record]:
        return self.editor.records

    @property
    def table(self) -> Table:
        return Table(self.get_columns())

    def rows(self, page: int = 1, sort_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        return self.table.rows(self.records, page=page, sort_by=sort_by, descending=descending)

    def load(self) -> bool:
        return self.editor.load()

    def add_item(self):
        self.editor.open_create()

    def edit_item(self, record: Record):
        self.editor.open_edit(record)

    def delete_item(self, record_id: int) -> bool:
        return self.editor.delete_record(record_id)

    def submit(self, values: Dict[str, Any]) -> bool:
        return self.modal.submit(values)

    def cancel(self):
        self.modal.cancel()

    def trigger(self, action_name: str, record: Record):
        """Click a row action (Edit, Delete) in the table."""
        return self.table.trigger(action_name, record)
