"""
List Editor
Modal-driven create/edit/delete over a remote collection.

The editor keeps a cached copy of the collection and at most one draft.
Every remote call either completes and is reflected locally, or fails,
raises a user notification and leaves local state as it was.
"""

import copy
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from bootcamp.config import MSG_SAVE_FAILED, MSG_DELETE_FAILED, MSG_LOAD_FAILED
from bootcamp.client.errors import RecordServiceError
from bootcamp.client.record_service import Record, RecordService

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]
Projection = Callable[[Dict[str, Any]], Record]


class Mode(str, Enum):
    CREATE = 'create'
    UPDATE = 'update'


class EditorState(str, Enum):
    IDLE = 'idle'
    EDITING = 'editing'
    CREATING = 'creating'


def log_notification(message: str):
    logger.error(f"[Notify] {message}")


class ListEditor:
    """
    CRUD list editor.

    States: idle -> creating / editing -> idle (on cancel or a successful
    submit). Failed calls never change state.

    Args:
        service: record service the collection lives in
        project: builds the request payload from form values; only the
            fields it returns are sent
        notify: shows a transient message to the user
    """

    def __init__(
        self,
        service: RecordService,
        project: Projection,
        notify: Optional[Notifier] = None,
        save_error: str = MSG_SAVE_FAILED,
        delete_error: str = MSG_DELETE_FAILED,
        load_error: str = MSG_LOAD_FAILED,
    ):
        self.service = service
        self.project = project
        self.notify = notify or log_notification
        self.save_error = save_error
        self.delete_error = delete_error
        self.load_error = load_error

        self.records: List[Record] = []
        self.draft: Optional[Record] = None
        self.mode = Mode.UPDATE

        self._load_generation = 0
        self._submitting = False

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def state(self) -> EditorState:
        if self.draft is None:
            return EditorState.IDLE
        return EditorState.CREATING if self.mode == Mode.CREATE else EditorState.EDITING

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        """Whether the modal's save button should be enabled."""
        return self.draft is not None and not self._submitting

    def find(self, record_id: int) -> Optional[Record]:
        return next((r for r in self.records if r.get('id') == record_id), None)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def load(self, filter: Optional[Dict[str, Any]] = None) -> bool:
        """
        Replace the collection with the server's list.

        Only the most recently started load may write the collection; a
        response that arrives after a newer load began is dropped.
        """
        self._load_generation += 1
        generation = self._load_generation

        try:
            records = self.service.list(filter) if filter is not None else self.service.list()
        except RecordServiceError as e:
            logger.error(f"Load failed: {e}")
            self.notify(self.load_error)
            return False

        if generation != self._load_generation:
            logger.info(f"Discarding stale list response (request {generation}, latest {self._load_generation})")
            return False

        self.records = list(records)
        return True

    def open_create(self):
        self.draft = {}
        self.mode = Mode.CREATE

    def open_edit(self, record: Record):
        self.draft = dict(record)
        self.mode = Mode.UPDATE

    def cancel(self):
        self.draft = None

    def submit(self, values: Dict[str, Any]) -> bool:
        """
        Save the open draft.

        Update merges the server's record into the collection by id; create
        appends it. Returns True when the draft was saved and closed.
        """
        if self.draft is None:
            logger.warning("Submit ignored: no draft is open")
            return False
        if self._submitting:
            logger.warning("Submit ignored: a save is already in flight")
            return False

        payload = self.project(values)
        mode = self.mode
        draft_id = self.draft.get('id')

        self._submitting = True
        try:
            if mode == Mode.UPDATE:
                item = self.service.update(draft_id, payload)
            else:
                item = self.service.create(payload)
        except RecordServiceError as e:
            logger.error(f"Save failed ({mode.value}): {e}")
            self.notify(self.save_error)
            return False
        finally:
            self._submitting = False

        if mode == Mode.UPDATE:
            self.records = [{**r, **item} if r.get('id') == item.get('id') else r for r in self.records]
        elif self.find(item.get('id')) is not None:
            # a reload that finished meanwhile already holds this record
            self.records = [{**r, **item} if r.get('id') == item.get('id') else r for r in self.records]
        else:
            self.records = self.records + [item]

        self.draft = None
        return True

    def delete_record(self, record_id: int) -> bool:
        """
        Delete a record, then reload the whole collection so server-side
        cascades show up.
        """
        try:
            self.service.delete(record_id)
        except RecordServiceError as e:
            logger.error(f"Delete failed (id={record_id}): {e}")
            self.notify(self.delete_error)
            return False

        return self.load()

    def snapshot(self) -> Dict[str, Any]:
        """Deep copy of the editor state, for debugging and tests."""
        return {
            'records': copy.deepcopy(self.records),
            'draft': copy.deepcopy(self.draft),
            'mode': self.mode,
            'state': self.state,
        }
