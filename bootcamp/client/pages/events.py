"""
Events Page
Admin list of events: create, edit and delete.
"""

from typing import Any, Dict, Optional

from bootcamp.config import EVENT_TYPES, URL_PATTERN
from bootcamp.client.forms import Form, FormField
from bootcamp.client.list_editor import Notifier
from bootcamp.client.pages.base import ListPage
from bootcamp.client.record_service import Record, RecordService
from bootcamp.client.tables import ActionColumn, Column, RowAction, string_sorter, string_trim_renderer


def create_event_record(values: Dict[str, Any]) -> Record:
    return {
        'name': values.get('name'),
        'description': values.get('description'),
        'descriptionUrl': values.get('descriptionUrl'),
        'type': values.get('type'),
    }


def get_initial_values(draft: Record) -> Dict[str, Any]:
    return dict(draft)


class EventsPage(ListPage):
    title = 'Manage Events'
    form_title = 'Event'

    def __init__(self, service: RecordService, notify: Optional[Notifier] = None):
        super().__init__(
            service, create_event_record, notify=notify,
            save_error='An error occurred. Can not save the event.',
        )

    def build_form(self) -> Form:
        return Form(
            title=self.form_title,
            get_initial_values=get_initial_values,
            fields=[
                FormField('name', 'Name', required=True, message='Please enter event name'),
                FormField('descriptionUrl', 'Description URL', pattern=URL_PATTERN,
                          message='Please enter valid URL'),
                FormField('description', 'Description', kind='textarea'),
                FormField('type', 'Event Type', kind='select', required=True,
                          message='Please select a type', choices=EVENT_TYPES),
            ],
        )

    def get_columns(self):
        return [
            Column('Id', 'id'),
            Column('Name', 'name', sorter=string_sorter('name')),
            Column('Description URL', 'descriptionUrl'),
            Column('Description', 'description', render=string_trim_renderer),
            Column('Type', 'type'),
            ActionColumn([
                RowAction('Edit', self.edit_item),
                RowAction('Delete', lambda record: self.delete_item(record['id'])),
            ]),
        ]
