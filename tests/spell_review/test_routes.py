"""
Tests for the Spelling API
==========================
Flask endpoints exercised through the test client.
"""

import pytest

from app import app


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


class TestCheckEndpoint:
    """Tests for POST /api/spelling/check."""

    def test_check(self, client):
        response = client.post('/api/spelling/check', json={'text': 'teh cat'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['count'] == 1
        assert data['errors'] == [
            {'word': 'teh', 'startIndex': 0, 'endIndex': 3, 'suggestions': ['the']},
        ]

    def test_custom_words_file(self, client, tmp_path, fresh_config):
        """One-shot checks and sessions accept the same custom words."""
        path = tmp_path / "terms.txt"
        path.write_text("kubernetes\n", encoding="utf-8")
        fresh_config.custom_words_file = str(path)

        response = client.post('/api/spelling/check', json={'text': 'kubernetes'})
        assert response.get_json()['count'] == 0
        response = client.post('/api/spelling/sessions', json={'text': 'kubernetes'})
        assert response.get_json()['session']['state'] == 'clean'

    def test_missing_text(self, client):
        response = client.post('/api/spelling/check', json={})
        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert data['error']['code'] == 'VALIDATION_ERROR'

    def test_non_json_body(self, client):
        response = client.post('/api/spelling/check', data='teh', content_type='text/plain')
        assert response.status_code == 400

    def test_correlation_header(self, client):
        response = client.post('/api/spelling/check', json={'text': ''},
                               headers={'X-Correlation-ID': 'abc123'})
        assert response.headers['X-Correlation-ID'] == 'abc123'


class TestReplaceEndpoint:
    """Tests for POST /api/spelling/replace."""

    def test_replace(self, client):
        response = client.post('/api/spelling/replace', json={
            'text': 'I teh end',
            'error': {'word': 'teh', 'startIndex': 2, 'endIndex': 5, 'suggestions': ['the']},
            'replacement': 'the',
        })
        assert response.status_code == 200
        assert response.get_json() == {'success': True, 'text': 'I the end', 'delta': 0}

    def test_stale_error(self, client):
        response = client.post('/api/spelling/replace', json={
            'text': 'I the end',
            'error': {'word': 'teh', 'startIndex': 2, 'endIndex': 5},
            'replacement': 'the',
        })
        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'STALE_CORRECTION'

    def test_malformed_error(self, client):
        response = client.post('/api/spelling/replace', json={
            'text': 'I teh end', 'error': {'word': 'teh'}, 'replacement': 'the',
        })
        assert response.status_code == 400


class TestSessionEndpoints:
    """Tests for the correction-session endpoints."""

    def test_session_flow(self, client):
        response = client.post('/api/spelling/sessions', json={'text': 'teh freind'})
        assert response.status_code == 201
        session = response.get_json()['session']
        assert session['state'] == 'reviewing'
        sid = session['session_id']

        response = client.post(f'/api/spelling/sessions/{sid}/replace', json={'replacement': 'the'})
        assert response.get_json()['session']['current_error']['word'] == 'freind'

        response = client.post(f'/api/spelling/sessions/{sid}/replace', json={'replacement': 'friend'})
        assert response.get_json()['session']['state'] == 'reviewing_empty'

        response = client.post(f'/api/spelling/sessions/{sid}/apply')
        data = response.get_json()
        assert data['text'] == 'the friend'
        assert data['session']['state'] == 'applied'

    def test_skip_and_cancel(self, client):
        sid = client.post('/api/spelling/sessions', json={'text': 'teh freind'}).get_json()['session']['session_id']
        response = client.post(f'/api/spelling/sessions/{sid}/skip')
        assert response.get_json()['session']['current_index'] == 1

        response = client.post(f'/api/spelling/sessions/{sid}/cancel')
        assert response.get_json()['text'] == 'teh freind'

    def test_get_and_list(self, client):
        sid = client.post('/api/spelling/sessions', json={'text': 'the cat'}).get_json()['session']['session_id']
        response = client.get(f'/api/spelling/sessions/{sid}')
        assert response.get_json()['session']['state'] == 'clean'
        listed = client.get('/api/spelling/sessions').get_json()['sessions']
        assert [s['session_id'] for s in listed] == [sid]

    def test_unknown_session(self, client):
        response = client.get('/api/spelling/sessions/nope')
        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'SESSION_NOT_FOUND'

    def test_invalid_transition(self, client):
        sid = client.post('/api/spelling/sessions', json={'text': 'the cat'}).get_json()['session']['session_id']
        response = client.post(f'/api/spelling/sessions/{sid}/skip')
        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'INVALID_SESSION_STATE'


class TestHealth:
    def test_health(self, client):
        data = client.get('/api/health').get_json()
        assert data['status'] == 'ok'
        assert data['misspellings'] > 100
