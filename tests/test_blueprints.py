"""
HTTP layer: status codes, JSON envelopes and admin key checks.
"""

from unittest.mock import MagicMock, patch

import pytest

from bootcamp.config import ADMIN_KEY
from bootcamp.models import Task
from conftest import add_result, make_student


class TestPublic:

    def test_home(self, client):
        body = client.get('/').get_json()
        assert body['status'] == 'online'
        assert 'jstask' in body['constants']['task_types']

    def test_health(self, client):
        assert client.get('/health').get_json()['status'] == 'healthy'


class TestAuth:

    @pytest.mark.parametrize('method,url', [
        ('post', '/api/tasks'),
        ('put', '/api/tasks/1'),
        ('delete', '/api/tasks/1'),
        ('post', '/api/events'),
        ('delete', '/api/events/1'),
        ('post', '/api/course/1/tasks'),
        ('delete', '/api/course/1/tasks/1'),
        ('post', '/api/course/1/students/alice/expel'),
        ('post', '/api/admin/refresh-score'),
    ])
    def test_mutations_require_admin_key(self, client, method, url):
        response = getattr(client, method)(url, json={}, headers={'X-Admin-Key': 'wrong'})
        assert response.status_code == 401
        assert response.get_json() == {'success': False, 'error': 'Unauthorized'}

    def test_admin_key_in_body(self, client):
        response = client.post('/api/tasks', json={'admin_key': ADMIN_KEY, 'name': 'X', 'type': 'test'})
        assert response.status_code == 201

    def test_profile_requires_github_id(self, client):
        assert client.get('/api/profile').status_code == 401


class TestTasksApi:

    def test_crud(self, client, admin_headers):
        created = client.post('/api/tasks', json={'name': 'Songbird', 'type': 'jstask'}, headers=admin_headers)
        assert created.status_code == 201
        task_id = created.get_json()['data']['id']

        updated = client.put(f'/api/tasks/{task_id}', json={'tags': ['stage1']}, headers=admin_headers)
        assert updated.get_json()['data']['tags'] == ['stage1']

        listing = client.get('/api/tasks').get_json()
        assert listing['count'] == 1
        assert listing['data'][0]['name'] == 'Songbird'

        assert client.delete(f'/api/tasks/{task_id}', headers=admin_headers).get_json() == {'success': True, 'data': None}
        assert Task.query.count() == 0

    def test_validation_error(self, client, admin_headers):
        response = client.post('/api/tasks', json={'type': 'jstask'}, headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required field: name'

    def test_missing(self, client, admin_headers):
        assert client.put('/api/tasks/99', json={'name': 'X'}, headers=admin_headers).status_code == 404
        assert client.delete('/api/tasks/99', headers=admin_headers).status_code == 404

    def test_delete_scheduled_task_is_refused(self, client, admin_headers, course_task, task):
        response = client.delete(f'/api/tasks/{task.id}', headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Task is used by 1 course task(s)'
        assert Task.query.count() == 1


class TestEventsApi:

    def test_create_and_delete(self, client, admin_headers):
        created = client.post('/api/events', json={'name': 'Intro', 'type': 'warmup'}, headers=admin_headers)
        assert created.status_code == 201
        event_id = created.get_json()['data']['id']

        assert client.get('/api/events').get_json()['count'] == 1
        assert client.delete(f'/api/events/{event_id}', headers=admin_headers).status_code == 200
        assert client.delete(f'/api/events/{event_id}', headers=admin_headers).status_code == 404

    def test_invalid_type(self, client, admin_headers):
        response = client.post('/api/events', json={'name': 'Intro', 'type': 'party'}, headers=admin_headers)
        assert response.status_code == 400


class TestCourseApi:

    def test_course_tasks(self, client, admin_headers, course, stage, task):
        url = f'/api/course/{course.id}/tasks'
        created = client.post(url, json={
            'taskId': task.id, 'stageId': stage.id, 'studentEndDate': '2020-03-15T23:59:00Z',
        }, headers=admin_headers)
        assert created.status_code == 201
        data = created.get_json()['data']
        assert data['studentEndDate'] == '2020-03-15T23:59:00Z'

        detail = client.get(f"{url}/{data['id']}").get_json()['data']
        assert detail['name'] == 'Songbird'

        updated = client.put(f"{url}/{data['id']}", json={'maxScore': 50}, headers=admin_headers)
        assert updated.get_json()['data']['maxScore'] == 50

        assert client.get(url).get_json()['count'] == 1
        assert client.delete(f"{url}/{data['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"{url}/{data['id']}").status_code == 404

    def test_course_task_scores_must_be_numbers(self, client, admin_headers, course, stage, task, course_task):
        url = f'/api/course/{course.id}/tasks'
        created = client.post(url, json={'taskId': task.id, 'stageId': stage.id, 'maxScore': 'abc'},
                              headers=admin_headers)
        assert created.status_code == 400
        assert created.get_json()['error'] == 'Invalid maxScore'

        updated = client.put(f'{url}/{course_task.id}', json={'scoreWeight': 'heavy'}, headers=admin_headers)
        assert updated.status_code == 400
        assert updated.get_json()['error'] == 'Invalid scoreWeight'

    def test_course_task_of_other_course_is_hidden(self, client, course_task):
        assert client.get(f'/api/course/{course_task.course_id + 1}/tasks/{course_task.id}').status_code == 404

    def test_stages(self, client, course, stage):
        assert client.get(f'/api/course/{course.id}/stages').get_json()['data'] == [{'id': stage.id, 'name': 'Stage 1'}]

    def test_students_active_only(self, client, course):
        make_student(course, 'alice')
        make_student(course, 'bob', active=False)
        url = f'/api/course/{course.id}/students'

        active = client.get(url).get_json()
        assert [s['githubId'] for s in active['data']] == ['alice']
        assert active['stats']['studentCount'] == 1

        everyone = client.get(url, query_string={'activeOnly': 'false'}).get_json()
        assert len(everyone['data']) == 2
        assert everyone['stats']['activeStudentCount'] == 1

    def test_expel(self, client, admin_headers, course):
        make_student(course, 'alice')
        url = f'/api/course/{course.id}/students/alice/expel'

        response = client.post(url, json={'reason': 'left'}, headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()['data']['isActive'] is False
        assert client.post(url, json={}, headers=admin_headers).status_code == 400
        assert client.post(f'/api/course/{course.id}/students/nobody/expel', headers=admin_headers).status_code == 404

    def test_score_and_csv(self, client, admin_headers, course, course_task):
        add_result(make_student(course, 'alice'), course_task, 60)
        refreshed = client.post('/api/admin/refresh-score', json={'course_id': course.id}, headers=admin_headers)
        assert refreshed.get_json()['updated'] == 1

        score = client.get(f'/api/course/{course.id}/students/score').get_json()['data']
        assert score[0]['totalScore'] == 60
        assert score[0]['rank'] == 1

        response = client.get(f'/api/course/{course.id}/students/score/csv')
        assert response.mimetype == 'text/csv'
        assert 'alice' in response.get_data(as_text=True)

    def test_schedule(self, client, course, course_task, course_event):
        data = client.get(f'/api/course/{course.id}/schedule').get_json()['data']
        assert [e['event']['type'] for e in data] == ['jstask', 'lecture_online', 'deadline']

        events = client.get(f'/api/course/{course.id}/events').get_json()['data']
        assert events[0]['key'] == f'e{course_event.id}'


class TestUsersApi:

    @pytest.fixture
    def caller(self):
        return {'X-Github-Id': 'octocat'}

    def test_search(self, client, owner):
        data = client.get('/api/users/search/own').get_json()['data']
        assert data == [{'id': owner.id, 'githubId': 'owner', 'name': 'Task Owner'}]

    def test_profile_is_created_on_first_visit(self, client, caller):
        profile = client.get('/api/profile', headers=caller).get_json()['data']['user']
        assert profile['githubId'] == 'octocat'

    def test_registry_flow(self, client, caller, course):
        profile = client.post('/api/profile/registry', json={
            'firstName': 'Mona', 'lastName': 'Lisa', 'location': {'key': 3, 'label': 'Minsk'},
        }, headers=caller)
        assert profile.get_json()['data']['locationName'] == 'Minsk'

        registered = client.post('/api/registry/mentor', json={
            'maxStudentsLimit': 3, 'preferedStudentsLocation': 'city', 'preferedCourses': [course.id],
        }, headers=caller)
        assert registered.status_code == 200

        courses = client.get('/api/registry/courses').get_json()['data']
        assert [c['id'] for c in courses] == [course.id]

    def test_registry_validation(self, client, caller):
        response = client.post('/api/registry/mentor', json={'maxStudentsLimit': 1}, headers=caller)
        assert response.status_code == 400


class TestAdminApi:

    def test_refresh_all(self, client, admin_headers, course):
        make_student(course, 'alice')
        body = client.post('/api/admin/refresh-score', headers=admin_headers).get_json()
        assert body['success'] is True
        assert body['updated'] == 1

    def test_scheduler_status_without_scheduler(self, client, admin_headers):
        response = client.get('/api/admin/scheduler-status', headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()['data'] == {'status': 'not_running', 'jobs': []}

    def test_scheduler_status_lists_jobs(self, client, admin_headers):
        job = MagicMock(id='score_refresh', trigger='interval[0:30:00]', next_run_time=None)
        scheduler = MagicMock()
        scheduler.get_jobs.return_value = [job]
        with patch('bootcamp.admin.admin_bp._scheduler', scheduler):
            response = client.get('/api/admin/scheduler-status', headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()['data'] == {
            'status': 'running',
            'jobs': [{'id': 'score_refresh', 'trigger': 'interval[0:30:00]', 'next_run': None}],
        }

    def test_refresh_rejects_bad_course_id(self, client, admin_headers):
        response = client.post('/api/admin/refresh-score', json={'course_id': 'abc'}, headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid course_id'
