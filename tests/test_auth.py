import inspect

from petcare.main import app
from tests.conftest import register

# Test data
test_user_data = {
    "name": "jane doe",
    "email": "JANE@EX.com",
    "password": "secret1",
    "role": "client"
}

test_login_data = {
    "email": "jane@ex.com",
    "password": "secret1"
}

class TestAuthentication:

    def test_register_user(self, client):
        """Test user registration normalizes name and email."""
        response = client.post("/api/v1/auth/register", json=test_user_data)
        assert response.status_code == 201

        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Registration successful"
        assert body["requestId"]
        assert body["timestamp"].endswith("Z")

        user = body["data"]["user"]
        assert user["name"] == "Jane Doe"
        assert user["email"] == "jane@ex.com"
        assert user["role"] == "client"
        assert "password" not in user
        assert "password_hash" not in user
        assert body["data"]["token"]

    def test_register_sets_session_cookie(self, client):
        response = client.post("/api/v1/auth/register", json=test_user_data)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("token=")
        assert "HttpOnly" in cookie
        assert "samesite=strict" in cookie.lower()
        assert "Max-Age=604800" in cookie

    def test_register_role_defaults_to_client(self, client):
        data = dict(test_user_data)
        del data["role"]
        response = client.post("/api/v1/auth/register", json=data)
        assert response.status_code == 201
        assert response.json()["data"]["user"]["role"] == "client"

    def test_register_duplicate_email_any_case(self, client):
        """Test registration with duplicate email."""
        client.post("/api/v1/auth/register", json=test_user_data)

        duplicate = dict(test_user_data, email="jane@EX.COM")
        response = client.post("/api/v1/auth/register", json=duplicate)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "already registered" in body["message"]

    def test_register_invalid_password(self, client):
        """Test registration with invalid password."""
        invalid_data = dict(test_user_data, password="weak")

        response = client.post("/api/v1/auth/register", json=invalid_data)
        assert response.status_code == 400
        assert "password" in response.json()["message"]

    def test_register_invalid_email(self, client):
        response = client.post(
            "/api/v1/auth/register", json=dict(test_user_data, email="not-an-email")
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_register_empty_body(self, client):
        response = client.post("/api/v1/auth/register")
        assert response.status_code == 400

    def test_login_success(self, client):
        """Test successful login."""
        client.post("/api/v1/auth/register", json=test_user_data)
        client.cookies.clear()

        response = client.post("/api/v1/auth/login", json=test_login_data)
        assert response.status_code == 200

        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["token"]
        assert body["data"]["user"]["email"] == "jane@ex.com"
        assert "token=" in response.headers["set-cookie"]

    def test_login_email_case_insensitive(self, client):
        client.post("/api/v1/auth/register", json=test_user_data)
        response = client.post(
            "/api/v1/auth/login", json=dict(test_login_data, email="Jane@Ex.Com")
        )
        assert response.status_code == 200

    def test_login_invalid_credentials(self, client):
        """Test login with invalid credentials."""
        invalid_login = {
            "email": "nonexistent@example.com",
            "password": "wrongpassword"
        }

        response = client.post("/api/v1/auth/login", json=invalid_login)
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_wrong_password(self, client):
        """Test login with wrong password."""
        client.post("/api/v1/auth/register", json=test_user_data)

        wrong_login = dict(test_login_data, password="wrongpassword")
        response = client.post("/api/v1/auth/login", json=wrong_login)
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_profile_with_bearer_token(self, client):
        """Test getting current user info."""
        user, headers = register(client, "jane doe", "jane@ex.com")

        response = client.get("/api/v1/auth/profile", headers=headers)
        assert response.status_code == 200

        profile = response.json()["data"]["user"]
        assert profile["id"] == user["id"]
        assert profile["email"] == "jane@ex.com"
        assert "password_hash" not in profile

    def test_profile_with_cookie(self, client):
        client.post("/api/v1/auth/register", json=test_user_data)

        response = client.get("/api/v1/auth/profile")
        assert response.status_code == 200
        assert response.json()["data"]["user"]["name"] == "Jane Doe"

    def test_profile_without_token(self, client):
        response = client.get("/api/v1/auth/profile")
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["requestId"]

    def test_profile_invalid_token(self, client):
        """Test get current user with invalid token."""
        headers = {"Authorization": "Bearer invalid_token"}

        response = client.get("/api/v1/auth/profile", headers=headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_profile_falls_back_to_cookie_after_stale_header(self, client):
        client.post("/api/v1/auth/register", json=test_user_data)

        headers = {"Authorization": "Bearer stale"}
        response = client.get("/api/v1/auth/profile", headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "jane@ex.com"

    def test_profile_stale_header_and_stale_cookie(self, client):
        headers = {"Authorization": "Bearer stale", "Cookie": "token=garbage"}

        response = client.get("/api/v1/auth/profile", headers=headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_logout_clears_cookie(self, client):
        """Test user logout."""
        client.post("/api/v1/auth/register", json=test_user_data)

        response = client.post("/api/v1/auth/logout")
        assert response.status_code == 200
        assert response.json()["message"] == "Logout successful"
        assert 'token=""' in response.headers["set-cookie"]

        assert client.get("/api/v1/auth/profile").status_code == 401

class TestApplication:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_request_id_header(self, client):
        response = client.get("/health")
        assert response.headers["X-Request-ID"]

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/api/v1/nothing-here")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_api_routes_run_in_threadpool(self):
        api_routes = [route for route in app.routes if getattr(route, "path", "").startswith("/api/v1/")]
        api_routes = [route for route in api_routes if hasattr(route, "dependant")]
        assert api_routes
        for route in api_routes:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path
