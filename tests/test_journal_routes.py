# tests/test_journal_routes.py
"""
Journal entry CRUD over the REST API
"""

from conftest import login, register, journal_payload


def create_entry(client, **overrides):
    response = client.post('/api/journal', json=journal_payload(**overrides))
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_journal_requires_login(client):
    assert client.get('/api/journal').status_code == 401
    assert client.post('/api/journal', json=journal_payload()).status_code == 401


def test_create_entry(auth_client):
    entry = create_entry(auth_client, mood='Positive', tags=['discipline', ' ', 'sizing'])
    assert entry['title'] == 'Monday review'
    assert entry['mood'] == 'positive'
    assert entry['tags'] == ['discipline', 'sizing']
    assert entry['date'] == '2024-03-04T21:00:00Z'


def test_create_entry_without_mood(auth_client):
    payload = journal_payload()
    del payload['mood']
    response = auth_client.post('/api/journal', json=payload)
    assert response.status_code == 201
    assert response.get_json()['mood'] is None


def test_create_entry_validation(auth_client):
    assert auth_client.post('/api/journal', json=journal_payload(title='')).status_code == 400
    assert auth_client.post('/api/journal', json=journal_payload(mood='ecstatic')).status_code == 400
    assert auth_client.post('/api/journal', json=journal_payload(date='not a date')).status_code == 400


def test_entries_listed_newest_first(auth_client):
    create_entry(auth_client, title='first', date='2024-03-01T21:00:00Z')
    create_entry(auth_client, title='third', date='2024-03-03T21:00:00Z')
    create_entry(auth_client, title='second', date='2024-03-02T21:00:00Z')

    titles = [e['title'] for e in auth_client.get('/api/journal').get_json()]
    assert titles == ['third', 'second', 'first']


def test_update_and_delete_entry(auth_client):
    entry = create_entry(auth_client)

    response = auth_client.patch(f"/api/journal/{entry['id']}", json={'mood': 'negative'})
    assert response.status_code == 200
    updated = response.get_json()
    assert updated['mood'] == 'negative'
    assert updated['title'] == entry['title']

    assert auth_client.delete(f"/api/journal/{entry['id']}").status_code == 204
    response = auth_client.get(f"/api/journal/{entry['id']}")
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Journal entry not found'


def test_other_users_entry_is_forbidden(client):
    login(client)
    entry = create_entry(client)
    client.post('/api/logout')

    register(client, 'nosy')
    response = client.get(f"/api/journal/{entry['id']}")
    assert response.status_code == 403
    assert response.get_json()['message'] == 'Unauthorized access to this journal entry'
    assert client.delete(f"/api/journal/{entry['id']}").status_code == 403
