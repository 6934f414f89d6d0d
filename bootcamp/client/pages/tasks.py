"""
Tasks Page
Admin list of tasks: create and edit.
"""

from typing import Any, Dict, List, Optional

from bootcamp.config import TASK_TYPES, VERIFICATION_MODES, URL_PATTERN, GITHUB_REPO_URL_PATTERN
from bootcamp.client.forms import Form, FormField
from bootcamp.client.list_editor import Notifier
from bootcamp.client.pages.base import ListPage
from bootcamp.client.record_service import Record, RecordService
from bootcamp.client.tables import (
    ActionColumn, Column, RowAction, bool_renderer, string_sorter, tags_renderer
)


def create_task_record(values: Dict[str, Any]) -> Record:
    return {
        'type': values.get('type'),
        'name': values.get('name'),
        'verification': values.get('verification'),
        'githubPrRequired': bool(values.get('githubPrRequired')),
        'descriptionUrl': values.get('descriptionUrl'),
        'githubRepoName': values.get('githubRepoName'),
        'sourceGithubRepoUrl': values.get('sourceGithubRepoUrl'),
        'tags': values.get('tags'),
    }


def get_initial_values(draft: Record) -> Dict[str, Any]:
    return {**draft, 'verification': draft.get('verification') or 'manual'}


def _is_auto(values) -> bool:
    return values.get('verification') == 'auto'


class TasksPage(ListPage):
    title = 'Manage Tasks'
    form_title = 'Task'

    def __init__(self, service: RecordService, notify: Optional[Notifier] = None):
        super().__init__(service, create_task_record, notify=notify)

    @property
    def all_tags(self) -> List[str]:
        """Tags already used by any task, offered as select options."""
        tags = []
        for record in self.records:
            for tag in record.get('tags') or []:
                if tag not in tags:
                    tags.append(tag)
        return tags

    def build_form(self) -> Form:
        return Form(
            title=self.form_title,
            get_initial_values=get_initial_values,
            fields=[
                FormField('name', 'Name', required=True, message='Please enter task name'),
                FormField('tags', 'Tags', kind='tags'),
                FormField(
                    'descriptionUrl', 'Description URL', required=True,
                    message='Please enter description URL',
                    pattern=URL_PATTERN, pattern_message='Please enter valid URL',
                ),
                FormField('githubPrRequired', 'Github Pull Request required', kind='checkbox'),
                FormField('type', 'Task Type', kind='select', required=True,
                          message='Please select a type', choices=TASK_TYPES),
                FormField('verification', 'Verification', kind='radio',
                          choices={m: m.capitalize() for m in VERIFICATION_MODES}),
                FormField('githubRepoName', 'Expected Github Repo Name', visible=_is_auto),
                FormField(
                    'sourceGithubRepoUrl', 'Source Github Repo Url', required=True,
                    message='Please enter Github Repo Url', pattern=GITHUB_REPO_URL_PATTERN,
                    visible=lambda values: _is_auto(values) and values.get('type') == 'jstask',
                ),
            ],
        )

    def get_columns(self):
        return [
            Column('Id', 'id'),
            Column('Name', 'name', sorter=string_sorter('name')),
            Column('Tags', 'tags', render=tags_renderer),
            Column('Description URL', 'descriptionUrl'),
            Column('Github PR Required', 'githubPrRequired', render=bool_renderer),
            Column('Github Repo Name', 'githubRepoName'),
            Column('Verification', 'verification'),
            Column('Type', 'type'),
            ActionColumn([RowAction('Edit', self.edit_item)]),
        ]
