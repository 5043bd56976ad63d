"""
Tests for the REST API.
"""
import pytest

from timetabler.api import create_app
from timetabler.data.store import InMemoryStore
from timetabler.scheduler import TimetableService


@pytest.fixture
def client(sample_service):
    app = create_app(sample_service)
    app.config['TESTING'] = True
    return app.test_client()


@pytest.fixture
def empty_client():
    app = create_app(TimetableService(InMemoryStore()))
    app.config['TESTING'] = True
    return app.test_client()


class TestApi:
    """Test the Flask endpoints."""

    def test_health(self, client):
        response = client.get('/api/v1/health')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'healthy'

    def test_list_catalog(self, client):
        response = client.get('/api/v1/teachers')

        teachers = response.get_json()
        assert response.status_code == 200
        assert len(teachers) == 4
        assert teachers[0]['availability'] == sorted(['Monday', 'Tuesday', 'Wednesday', 'Friday'])

    def test_unknown_collection(self, client):
        response = client.get('/api/v1/students')
        assert response.status_code == 404
        assert 'error' in response.get_json()

    def test_add_update_delete_timing(self, client):
        response = client.post('/api/v1/timings', json={
            'name': 'Evening Lecture', 'startTime': '18:00', 'endTime': '19:30',
            'type': 'lecture', 'days': ['Monday']
        })
        assert response.status_code == 201
        timing = response.get_json()
        assert timing['kind'] == 'lecture'
        assert timing['duration'] == 90

        response = client.put(f"/api/v1/timings/{timing['id']}", json={'days': ['Monday', 'Friday']})
        assert response.status_code == 200
        assert response.get_json()['days'] == ['Monday', 'Friday']

        response = client.delete(f"/api/v1/timings/{timing['id']}")
        assert response.status_code == 200
        assert client.delete(f"/api/v1/timings/{timing['id']}").status_code == 404

    def test_add_record_with_unknown_field(self, client):
        response = client.post('/api/v1/rooms', json={'name': 'D-1', 'colour': 'red'})
        assert response.status_code == 400

    def test_null_multi_valued_fields_are_empty(self, client):
        response = client.post('/api/v1/teachers', json={
            'name': 'Dr. New', 'availability': None, 'subjects': None
        })
        assert response.status_code == 201
        assert response.get_json()['availability'] == []

        response = client.post('/api/v1/rooms', json={'name': 'D-1', 'equipment': None})
        assert response.status_code == 201
        assert response.get_json()['equipment'] == []

        assert client.get('/api/v1/teachers').status_code == 200
        assert client.post('/api/v1/timetable/generate').status_code == 200
        assert client.get('/api/v1/available-slots').status_code == 200

    @pytest.mark.parametrize('collection,body', [
        ('timings', {'name': 'Seminar', 'startTime': '15:00', 'endTime': '16:00',
                     'type': 'seminar', 'days': ['Monday']}),
        ('timings', {'name': 'Odd', 'startTime': '15:00', 'endTime': '16:00',
                     'type': 'lecture', 'days': ['Funday']}),
        ('rooms', {'name': 'D-1', 'capacity': 'big'}),
        ('courses', {'name': 'Chemistry', 'credits': 'many'}),
    ])
    def test_invalid_values_rejected_on_add(self, client, collection, body):
        before = client.get(f'/api/v1/{collection}').get_json()

        response = client.post(f'/api/v1/{collection}', json=body)

        assert response.status_code == 400
        assert 'error' in response.get_json()
        assert client.get(f'/api/v1/{collection}').get_json() == before
        assert client.post('/api/v1/timetable/generate').status_code == 200

    @pytest.mark.parametrize('collection,changes', [
        ('timings', {'type': 'seminar'}),
        ('timings', {'days': ['Monday', 'Funday']}),
        ('rooms', {'capacity': 'big'}),
    ])
    def test_invalid_values_rejected_on_update(self, client, collection, changes):
        before = client.get(f'/api/v1/{collection}').get_json()

        response = client.put(f'/api/v1/{collection}/1', json=changes)

        assert response.status_code == 400
        assert client.get(f'/api/v1/{collection}').get_json() == before

    def test_numeric_strings_are_converted(self, client):
        response = client.post('/api/v1/rooms', json={'name': 'D-1', 'capacity': '40'})

        assert response.status_code == 201
        assert response.get_json()['capacity'] == 40

    def test_update_times_recomputes_duration(self, client):
        timing = client.post('/api/v1/timings', json={
            'name': 'Seminar Hour', 'startTime': '09:00', 'endTime': '10:00',
            'type': 'lecture', 'days': ['Monday']
        }).get_json()
        assert timing['duration'] == 60

        response = client.put(f"/api/v1/timings/{timing['id']}", json={'endTime': '11:30'})

        assert response.status_code == 200
        assert response.get_json()['duration'] == 150

    @pytest.mark.parametrize('collection,body', [
        ('teachers', {'name': 'Dr. New', 'availability': 'Monday'}),
        ('teachers', {'name': 'Dr. New', 'subjects': 'Maths'}),
        ('rooms', {'name': 'D-1', 'equipment': 'Projector'}),
        ('timings', {'name': 'Evening', 'startTime': '18:00', 'endTime': '19:00',
                     'type': 'lecture', 'days': 'Monday'}),
    ])
    def test_list_fields_must_be_arrays(self, client, collection, body):
        response = client.post(f'/api/v1/{collection}', json=body)

        assert response.status_code == 400
        assert 'array' in response.get_json()['error']

    def test_list_fields_must_be_arrays_on_update(self, client):
        response = client.put('/api/v1/teachers/1', json={'availability': 'Monday'})

        assert response.status_code == 400
        availability = client.get('/api/v1/teachers').get_json()[0]['availability']
        assert 'Monday' in availability

    def test_generate(self, client):
        response = client.post('/api/v1/timetable/generate')

        body = response.get_json()
        assert response.status_code == 200
        assert len(body['timetable']) == 4
        assert 'Assigned 4 of 4' in body['message']
        assert len(client.get('/api/v1/timetable').get_json()) == 4

    def test_generate_without_data(self, empty_client):
        response = empty_client.post('/api/v1/timetable/generate')

        assert response.status_code == 400
        assert response.get_json()['reason'] == 'missing-courses'

    def test_manual_entry_conflict(self, empty_client):
        entry = {'course': 'Algebra', 'teacher': 'T1', 'room': 'R1', 'day': 'Tuesday', 'startTime': '09:00'}

        first = empty_client.post('/api/v1/timetable', json=entry)
        second = empty_client.post('/api/v1/timetable', json=dict(entry, room='R2'))

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.get_json()['kind'] == 'schedule-conflict'
        assert 'T1' in second.get_json()['error']
        assert len(empty_client.get('/api/v1/timetable').get_json()) == 1

    def test_manual_entry_unavailable(self, client):
        response = client.post('/api/v1/timetable', json={
            'course': 'Algebra', 'teacher': 'Dr. Sarah Johnson', 'room': 'A-101',
            'day': 'Thursday', 'startTime': '08:00'
        })

        assert response.status_code == 409
        assert response.get_json()['kind'] == 'teacher-unavailable'

    def test_manual_entry_missing_fields(self, client):
        response = client.post('/api/v1/timetable', json={'course': 'Algebra'})
        assert response.status_code == 400

    def test_manual_entry_unknown_day(self, empty_client):
        response = empty_client.post('/api/v1/timetable', json={
            'course': 'Algebra', 'teacher': 'T1', 'room': 'R1',
            'day': 'Funday', 'startTime': '09:00', 'endTime': '10:00'
        })

        assert response.status_code == 400
        assert 'Funday' in response.get_json()['error']
        assert empty_client.get('/api/v1/timetable').get_json() == []

    def test_delete_and_clear_timetable(self, client):
        entries = client.post('/api/v1/timetable/generate').get_json()['timetable']

        assert client.delete(f"/api/v1/timetable/{entries[0]['id']}").status_code == 200
        assert client.delete('/api/v1/timetable/missing').status_code == 404

        assert client.post('/api/v1/timetable/clear').status_code == 200
        assert client.get('/api/v1/timetable').get_json() == []

    def test_available_slots(self, client):
        response = client.get('/api/v1/available-slots')

        slots = response.get_json()
        assert response.status_code == 200
        assert len(slots) == 12
        assert slots[0]['day'] == 'Monday'
        assert slots[0]['start_time'] == '08:00'
        assert 'A-101' in slots[0]['available_rooms']
