"""
ApiClient and RestRecordService over a mocked requests session.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from bootcamp.client.api import ApiClient
from bootcamp.client.errors import NetworkError, NotFound, ServerError
from bootcamp.client.record_service import RestRecordService, course_task_service, event_service, task_service


def make_response(status=200, body=None):
    response = MagicMock()
    response.status_code = status
    if body is None:
        response.json.side_effect = ValueError('no json')
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def api():
    return ApiClient('http://api.test/', admin_key='secret', github_id='octocat', timeout=3)


class TestApiClient:

    def test_headers_and_url(self, api):
        assert api.session.headers['X-Admin-Key'] == 'secret'
        assert api.session.headers['X-Github-Id'] == 'octocat'
        assert api.url('/api/tasks') == 'http://api.test/api/tasks'

    def test_unwraps_envelope(self, api):
        with patch.object(requests.Session, 'request', return_value=make_response(body={'success': True, 'data': [1]})) as request:
            assert api.get('/api/tasks', params={'a': 'b'}) == [1]
        request.assert_called_once_with('GET', 'http://api.test/api/tasks', timeout=3, params={'a': 'b'})

    def test_post_sends_json(self, api):
        with patch.object(requests.Session, 'request', return_value=make_response(201, {'success': True, 'data': {'id': 1}})) as request:
            assert api.post('/api/tasks', {'name': 'x'}) == {'id': 1}
        assert request.call_args.kwargs['json'] == {'name': 'x'}

    def test_timeout_is_network_error(self, api):
        with patch.object(requests.Session, 'request', side_effect=requests.exceptions.Timeout()):
            with pytest.raises(NetworkError):
                api.get('/api/tasks')

    def test_connection_error_is_network_error(self, api):
        with patch.object(requests.Session, 'request', side_effect=requests.exceptions.ConnectionError('refused')):
            with pytest.raises(NetworkError):
                api.get('/api/tasks')

    def test_404_is_not_found(self, api):
        with patch.object(requests.Session, 'request', return_value=make_response(404, {'success': False, 'error': 'Task not found'})):
            with pytest.raises(NotFound) as exc:
                api.delete('/api/tasks/9')
        assert str(exc.value) == 'Task not found'
        assert exc.value.status == 404

    def test_error_status_is_server_error(self, api):
        with patch.object(requests.Session, 'request', return_value=make_response(400, {'success': False, 'error': 'Missing required field: name'})):
            with pytest.raises(ServerError) as exc:
                api.post('/api/tasks', {})
        assert exc.value.status == 400
        assert 'name' in str(exc.value)

    def test_non_json_error_body(self, api):
        with patch.object(requests.Session, 'request', return_value=make_response(502)):
            with pytest.raises(ServerError) as exc:
                api.get('/api/tasks')
        assert exc.value.status == 502

    def test_success_false_is_server_error(self, api):
        with patch.object(requests.Session, 'request', return_value=make_response(200, {'success': False, 'error': 'nope'})):
            with pytest.raises(ServerError):
                api.get('/api/tasks')


class TestRestRecordService:

    @pytest.fixture
    def api(self):
        return MagicMock(spec=ApiClient)

    def test_paths(self, api):
        assert task_service(api).path == '/api/tasks'
        assert event_service(api).path == '/api/events'
        assert course_task_service(api, 11).path == '/api/course/11/tasks'

    def test_crud_calls(self, api):
        service = RestRecordService(api, '/api/events/')
        api.get.return_value = None
        api.post.return_value = {'id': 1}
        api.put.return_value = {'id': 1, 'name': 'B'}

        assert service.list() == []
        assert service.create({'name': 'A'}) == {'id': 1}
        assert service.update(1, {'name': 'B'}) == {'id': 1, 'name': 'B'}
        service.delete(1)

        api.get.assert_called_once_with('/api/events', params=None)
        api.post.assert_called_once_with('/api/events', {'name': 'A'})
        api.put.assert_called_once_with('/api/events/1', {'name': 'B'})
        api.delete.assert_called_once_with('/api/events/1')

    def test_errors_propagate(self, api):
        api.delete.side_effect = NotFound()
        with pytest.raises(NotFound):
            RestRecordService(api, '/api/events').delete(5)
