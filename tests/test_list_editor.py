"""
List editor tests: state machine, collection updates and failure handling
against an in-memory record service.
"""

import pytest

from bootcamp.client.errors import NetworkError, NotFound, ServerError
from bootcamp.client.list_editor import EditorState, ListEditor, Mode
from fakes import FakeRecordService, project_name


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def service():
    return FakeRecordService([{'id': 1, 'name': 'A', 'type': 'jstask'}, {'id': 2, 'name': 'B', 'type': 'test'}])


@pytest.fixture
def editor(service, notifications):
    editor = ListEditor(service, project_name, notify=notifications.append)
    assert editor.load()
    return editor


class TestLoad:
    """load() replaces the collection wholesale."""

    def test_load_replaces_collection(self, editor, service):
        service.rows = [{'id': 5, 'name': 'E'}]
        assert editor.load()
        assert editor.records == [{'id': 5, 'name': 'E'}]

    def test_load_failure_keeps_collection_and_notifies(self, editor, service, notifications):
        before = list(editor.records)
        service.fail['list'] = NetworkError('down')

        assert editor.load() is False
        assert editor.records == before
        assert notifications == [editor.load_error]

    def test_stale_response_is_discarded(self, service, notifications):
        """A response from an older load must not overwrite a newer one."""
        editor = ListEditor(service, project_name, notify=notifications.append)
        original_list = service.list
        results = []
        started = []

        def slow_list(filter=None):
            stale = original_list()
            if not started:
                started.append(True)
                service.rows = [{'id': 9, 'name': 'fresh'}]
                # a newer load starts and finishes while this one is in flight
                results.append(editor.load())
            return stale

        service.list = slow_list
        assert editor.load() is False
        assert results == [True]
        assert editor.records == [{'id': 9, 'name': 'fresh'}]

    def test_load_passes_filter(self, service, notifications):
        seen = []
        service.list = lambda filter=None: seen.append(filter) or []
        editor = ListEditor(service, project_name, notify=notifications.append)
        editor.load({'activeOnly': 'true'})
        assert seen == [{'activeOnly': 'true'}]


class TestDraftLifecycle:

    def test_initial_state_is_idle(self, editor):
        assert editor.state == EditorState.IDLE
        assert editor.draft is None

    def test_open_create(self, editor):
        editor.open_create()
        assert editor.draft == {}
        assert editor.mode == Mode.CREATE
        assert editor.state == EditorState.CREATING

    def test_open_edit_copies_record(self, editor):
        record = editor.records[0]
        editor.open_edit(record)

        assert editor.state == EditorState.EDITING
        assert editor.mode == Mode.UPDATE
        assert editor.draft == record
        editor.draft['name'] = 'changed'
        assert record['name'] == 'A'

    def test_edit_then_cancel_changes_nothing(self, editor, service):
        before = editor.snapshot()
        editor.open_edit(editor.records[0])
        editor.cancel()

        assert editor.state == EditorState.IDLE
        assert editor.records == before['records']
        assert 'update' not in service.calls

    def test_open_edit_replaces_open_draft(self, editor):
        editor.open_create()
        editor.open_edit(editor.records[1])
        assert editor.mode == Mode.UPDATE
        assert editor.draft['id'] == 2


class TestSubmit:

    def test_update_replaces_only_matching_record(self, editor):
        editor.open_edit(editor.records[0])
        assert editor.submit({'name': 'Z'})

        assert len(editor.records) == 2
        assert editor.records[0] == {'id': 1, 'name': 'Z', 'type': 'jstask'}
        assert editor.records[1] == {'id': 2, 'name': 'B', 'type': 'test'}
        assert editor.state == EditorState.IDLE

    def test_update_merges_response_over_existing_fields(self, service, notifications):
        editor = ListEditor(service, project_name, notify=notifications.append)
        editor.load()
        service.update = lambda record_id, payload: {'id': record_id, 'name': 'server'}

        editor.open_edit(editor.records[0])
        editor.submit({'name': 'ignored'})
        assert editor.records[0] == {'id': 1, 'name': 'server', 'type': 'jstask'}

    def test_create_appends_server_record(self, editor):
        editor.open_create()
        assert editor.submit({'name': 'X'})

        assert len(editor.records) == 3
        assert editor.records[-1] == {'id': 100, 'name': 'X'}
        assert editor.draft is None

    def test_payload_is_projected(self, editor, service):
        sent = []
        original = service.create
        service.create = lambda payload: sent.append(payload) or original(payload)

        editor.open_create()
        editor.submit({'name': 'X', 'unknown': 'dropped'})
        assert sent == [{'name': 'X'}]

    def test_create_with_known_id_does_not_duplicate(self, editor, service):
        service.create = lambda payload: {'id': 1, 'name': 'A2'}
        editor.open_create()
        editor.submit({'name': 'A2'})

        assert [r['id'] for r in editor.records] == [1, 2]
        assert editor.records[0]['name'] == 'A2'

    @pytest.mark.parametrize('error', [NetworkError('timeout'), ServerError('boom', 500), NotFound()])
    def test_failed_update_leaves_state_untouched(self, editor, service, notifications, error):
        editor.open_edit(editor.records[0])
        before = editor.snapshot()
        service.fail['update'] = error

        assert editor.submit({'name': 'Z'}) is False
        assert editor.snapshot() == before
        assert editor.state == EditorState.EDITING
        assert notifications == [editor.save_error]

    def test_failed_create_leaves_state_untouched(self, editor, service, notifications):
        editor.open_create()
        before = editor.snapshot()
        service.fail['create'] = ServerError('bad request', 400)

        assert editor.submit({'name': 'X'}) is False
        assert editor.snapshot() == before
        assert editor.state == EditorState.CREATING
        assert len(notifications) == 1

    def test_submit_without_draft_is_ignored(self, editor, service):
        assert editor.submit({'name': 'X'}) is False
        assert 'create' not in service.calls and 'update' not in service.calls

    def test_double_submit_is_refused(self, editor, service):
        """A second submit while the first is in flight does nothing."""
        nested = []
        original = service.create

        def create(payload):
            assert editor.is_submitting
            assert not editor.can_submit
            nested.append(editor.submit({'name': 'again'}))
            return original(payload)

        service.create = create
        editor.open_create()

        assert editor.submit({'name': 'X'})
        assert nested == [False]
        assert service.calls.count('create') == 1
        assert len(editor.records) == 3
        assert not editor.is_submitting

    def test_submitting_flag_resets_after_failure(self, editor, service):
        service.fail['create'] = NetworkError('down')
        editor.open_create()
        editor.submit({'name': 'X'})
        assert not editor.is_submitting
        assert editor.can_submit


class TestDelete:

    def test_delete_reloads_collection(self, editor, service):
        assert editor.delete_record(1)
        assert service.calls[-2:] == ['delete', 'list']
        assert all(r['id'] != 1 for r in editor.records)

    def test_delete_picks_up_server_side_changes(self, editor, service):
        original = service.delete

        def delete(record_id):
            original(record_id)
            service.rows.append({'id': 3, 'name': 'added elsewhere'})

        service.delete = delete
        editor.delete_record(2)
        assert [r['id'] for r in editor.records] == [1, 3]

    def test_delete_missing_record_notifies(self, editor, notifications):
        before = list(editor.records)
        assert editor.delete_record(42) is False
        assert editor.records == before
        assert notifications == [editor.delete_error]

    def test_delete_network_failure_keeps_collection(self, editor, service, notifications):
        service.fail['delete'] = NetworkError('down')
        before = list(editor.records)
        assert editor.delete_record(1) is False
        assert editor.records == before
        assert 'list' not in service.calls[1:]


class TestScenarios:

    def test_rename_scenario(self, notifications):
        service = FakeRecordService([{'id': 1, 'name': 'A'}])
        editor = ListEditor(service, project_name, notify=notifications.append)
        editor.load()

        editor.open_edit(editor.records[0])
        editor.submit({'name': 'B'})

        assert editor.records == [{'id': 1, 'name': 'B'}]
        assert editor.state == EditorState.IDLE

    def test_create_into_empty_scenario(self, notifications):
        service = FakeRecordService([], next_id=7)
        editor = ListEditor(service, project_name, notify=notifications.append)
        editor.load()

        editor.open_create()
        editor.submit({'name': 'X'})

        assert editor.records == [{'id': 7, 'name': 'X'}]
        assert notifications == []

    def test_default_notifier_logs(self, caplog):
        service = FakeRecordService()
        service.fail['list'] = NetworkError('down')
        editor = ListEditor(service, project_name)
        editor.load()
        assert editor.load_error in caplog.text
