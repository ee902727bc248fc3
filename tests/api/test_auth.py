"""
API tests for registration, login, logout and access control.
"""

from cinerank.api.dependencies import SESSION_COOKIE
from cinerank.database import crud



class TestRegistration:
    """GET/POST /register."""

    def test_register_form(self, client):
        r = client.get("/register")
        assert r.status_code == 200
        assert "Register" in r.text

    def test_register_logs_in(self, client, session, session_store):
        r = client.post(
            "/register",
            data={"username": "dana", "email": "dana@example.com", "password": "pw12345"},
            follow_redirects=False,
        )
        assert r.status_code == 303
        assert r.headers["location"] == "/"

        set_cookie = r.headers["set-cookie"]
        assert SESSION_COOKIE in set_cookie
        assert "httponly" in set_cookie.lower()
        assert "max-age=86400" in set_cookie.lower()

        user = crud.get_user_by_email(session, "dana@example.com")
        assert user.role == "user"
        assert user.password_hash != "pw12345"
        assert session_store.resolve(r.cookies[SESSION_COOKIE]) == user.id

    def test_register_duplicate_email(self, client, make_user):
        make_user("erin")
        r = client.post(
            "/register",
            data={"username": "erin2", "email": "erin@example.com", "password": "pw"},
        )
        assert r.status_code == 409
        assert "already registered" in r.text

    def test_register_missing_fields(self, client):
        r = client.post("/register", data={"username": "", "email": "x@example.com", "password": "pw"})
        assert r.status_code == 400
        assert "Username is required" in r.text

    def test_password_kept_as_typed(self, client, login):
        r = client.post(
            "/register",
            data={"username": "hank", "email": "hank@example.com", "password": " secret123 "},
            follow_redirects=False,
        )
        assert r.status_code == 303

        client.cookies.clear()
        assert login("hank@example.com", password=" secret123 ").status_code == 303
        assert login("hank@example.com", password="secret123").status_code == 401

    def test_register_blank_password(self, client):
        r = client.post("/register", data={"username": "ivy", "email": "ivy@example.com", "password": "   "})
        assert r.status_code == 400
        assert "Password is required" in r.text


class TestLogin:
    """GET/POST /login and GET /logout."""

    def test_login_form(self, client):
        r = client.get("/login")
        assert r.status_code == 200

    def test_login_success(self, login, make_user):
        user = make_user("frank")
        r = login(user.email)
        assert r.status_code == 303
        assert SESSION_COOKIE in r.cookies

    def test_login_wrong_password(self, login, make_user):
        user = make_user("gina")
        r = login(user.email, password="wrong")
        assert r.status_code == 401
        assert "Invalid credentials" in r.text
        assert SESSION_COOKIE not in r.cookies

    def test_login_unknown_email(self, login):
        r = login("ghost@example.com")
        assert r.status_code == 401

    def test_logout_invalidates_session(self, user_client, session_store):
        token = user_client.cookies[SESSION_COOKIE]
        r = user_client.get("/logout", follow_redirects=False)
        assert r.status_code == 303
        assert len(session_store) == 0
        assert session_store.get(token) is None

        r = user_client.get("/add-movie", follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/login"

    def test_logout_without_session(self, client):
        r = client.get("/logout", follow_redirects=False)
        assert r.status_code == 303


class TestAccessControl:
    """Auth-required and admin-only routes."""

    def test_page_redirects_when_anonymous(self, client):
        r = client.get("/add-movie", follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/login"

    def test_api_returns_401_when_anonymous(self, client):
        r = client.post("/api/movies", json={"title": "X", "year": 2000})
        assert r.status_code == 401

    def test_bogus_cookie_is_anonymous(self, client):
        client.cookies.set(SESSION_COOKIE, "forged")
        r = client.get("/add-movie", follow_redirects=False)
        assert r.status_code == 303

    def test_session_of_deleted_user_is_anonymous(self, user_client, session):
        crud.delete_user(session, user_client.user_id)
        r = user_client.get("/add-movie", follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/login"

    def test_admin_requires_admin_role(self, user_client):
        r = user_client.get("/admin")
        assert r.status_code == 403

    def test_admin_redirects_when_anonymous(self, client):
        r = client.get("/admin", follow_redirects=False)
        assert r.status_code == 303

    def test_admin_panel(self, admin_client, make_user):
        make_user("henry")
        r = admin_client.get("/admin")
        assert r.status_code == 200
        assert "henry@example.com" in r.text
