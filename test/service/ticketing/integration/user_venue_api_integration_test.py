"""
Integration tests for registration, login, venues and the health endpoints
"""

from typing import Any

from fastapi.testclient import TestClient


class TestUserApi:
    def test_register_and_login(self, client: TestClient) -> None:
        registered = client.post(
            '/api/register',
            json={
                'username': 'taylor',
                'email': 'Taylor@Example.com',
                'password': 'P@ssw0rd',
                'organizer': True,
            },
        )
        logged_in = client.post(
            '/api/login', json={'email': 'taylor@example.com', 'password': 'P@ssw0rd'}
        )

        assert registered.status_code == 201, registered.text
        assert registered.json()['email'] == 'taylor@example.com'
        assert 'password' not in registered.json()
        assert 'hashedPassword' not in registered.json()
        assert logged_in.status_code == 200, logged_in.text
        body = logged_in.json()
        assert body['tokenType'] == 'bearer'
        assert body['username'] == 'taylor'
        assert body['organizer'] is True
        assert body['token']

    def test_duplicate_registration(self, client: TestClient) -> None:
        payload = {'username': 'dup', 'email': 'dup@t.com', 'password': 'P@ssw0rd'}

        assert client.post('/api/register', json=payload).status_code == 201
        again = client.post('/api/register', json={**payload, 'email': 'other@t.com'})

        assert again.status_code == 409

    def test_invalid_registration(self, client: TestClient) -> None:
        short_password = client.post(
            '/api/register', json={'username': 'u', 'email': 'u@t.com', 'password': 'short'}
        )
        bad_email = client.post(
            '/api/register', json={'username': 'u', 'email': 'nope', 'password': 'P@ssw0rd'}
        )

        assert short_password.status_code == 400
        assert bad_email.status_code == 400

    def test_bad_credentials(self, client: TestClient) -> None:
        client.post(
            '/api/register',
            json={'username': 'sam', 'email': 'sam@t.com', 'password': 'P@ssw0rd'},
        )

        wrong_password = client.post(
            '/api/login', json={'email': 'sam@t.com', 'password': 'Wr0ngPass'}
        )
        unknown = client.post('/api/login', json={'email': 'ghost@t.com', 'password': 'P@ssw0rd'})

        assert wrong_password.status_code == 400
        assert wrong_password.json()['detail'] == 'LOGIN_BAD_CREDENTIALS'
        assert unknown.status_code == 400


class TestVenueApi:
    def test_create_and_list(self, client: TestClient, venue: dict[str, Any]) -> None:
        response = client.get('/api/venues')

        assert response.status_code == 200
        assert [v['id'] for v in response.json()] == [venue['id']]
        assert response.json()[0]['name'] == 'Blue Note'
        assert response.json()[0]['address'] == '131 W 3rd St, New York'

    def test_only_organizers_create(self, client: TestClient, fan_headers: dict[str, str]) -> None:
        response = client.post(
            '/api/venues', json={'name': 'Garage', 'address': 'Somewhere'}, headers=fan_headers
        )

        assert response.status_code == 403
        assert client.post('/api/venues', json={'name': 'G', 'address': 'S'}).status_code == 401

    def test_address_required(
        self, client: TestClient, organizer_headers: dict[str, str]
    ) -> None:
        response = client.post(
            '/api/venues', json={'name': 'Garage', 'address': ''}, headers=organizer_headers
        )

        assert response.status_code == 400


class TestCommonEndpoints:
    def test_health(self, client: TestClient) -> None:
        assert client.get('/health').json()['status'] == 'healthy'

    def test_metrics(self, client: TestClient) -> None:
        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'reservation_requests_total' in response.text
