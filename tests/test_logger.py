"""
Request logging middleware.
"""

import json
import logging
import sys

import pytest

from bootcamp.logger import JsonFormatter, create_default_logger


def processed(caplog):
    return [r for r in caplog.records if r.getMessage().startswith('Processed request')]


@pytest.fixture(autouse=True)
def capture_info(caplog):
    caplog.set_level(logging.INFO)


class TestRequestLogging:

    def test_one_record_per_request(self, client, caplog):
        client.get('/api/tasks', query_string={'page': '2'})

        records = processed(caplog)
        assert len(records) == 1
        assert records[0].request == {
            'status': 200,
            'method': 'GET',
            'url': '/api/tasks?page=2',
            'query': {'page': '2'},
            'user_id': None,
        }
        assert records[0].getMessage() == 'Processed request GET /api/tasks?page=2 200'

    def test_error_status_is_logged(self, client, caplog):
        client.post('/api/tasks', json={})
        assert processed(caplog)[0].request['status'] == 401

    def test_unknown_route(self, client, caplog):
        client.get('/nowhere')
        assert processed(caplog)[0].request['status'] == 404

    def test_user_id_from_caller(self, client, caplog):
        client.get('/api/profile', headers={'X-Github-Id': 'octocat'})
        assert processed(caplog)[0].request['user_id'] is not None

    def test_unhandled_exception(self, app, client, caplog):
        app.config['PROPAGATE_EXCEPTIONS'] = False

        @app.route('/boom')
        def boom():
            raise RuntimeError('kaboom')

        response = client.get('/boom')

        assert response.status_code == 500
        records = processed(caplog)
        assert len(records) == 1
        assert records[0].request['status'] == 500
        failures = [r for r in caplog.records if r.getMessage().startswith('Request failed')]
        assert failures[0].levelno == logging.ERROR
        assert 'kaboom' in failures[0].getMessage()


class TestJsonFormatter:

    def test_request_fields_are_merged(self):
        record = logging.LogRecord('bootcamp', logging.INFO, __file__, 1, 'Processed request', None, None)
        record.request = {'status': 201, 'method': 'POST'}

        data = json.loads(JsonFormatter().format(record))
        assert data['msg'] == 'Processed request'
        assert data['level'] == 'info'
        assert data['status'] == 201
        assert data['method'] == 'POST'

    def test_exception_is_included(self):
        try:
            raise ValueError('bad')
        except ValueError:
            record = logging.LogRecord('bootcamp', logging.ERROR, __file__, 1, 'failed', None, sys.exc_info())

        data = json.loads(JsonFormatter().format(record))
        assert 'ValueError: bad' in data['err']

    def test_json_logger_gets_single_handler(self):
        logger = create_default_logger('bootcamp.test_json', log_format='json')
        create_default_logger('bootcamp.test_json', log_format='json')

        assert len(logger.handlers) == 1
        assert logger.propagate is False
