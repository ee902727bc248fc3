"""
End-to-end test of the main user journey:

1. Register a user
2. Log out and log back in
3. Create a movie
4. Review it
5. Movie stats reflect the review
"""

from cinerank.api.dependencies import SESSION_COOKIE


def test_register_login_movie_review_flow(client, session_store):
    r = client.post(
        "/register",
        data={"username": "kim", "email": "kim@example.com", "password": "pw-kim"},
        follow_redirects=False,
    )
    assert r.status_code == 303

    client.get("/logout", follow_redirects=False)
    assert len(session_store) == 0

    r = client.post(
        "/login",
        data={"email": "kim@example.com", "password": "pw-kim"},
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert SESSION_COOKIE in r.cookies

    r = client.post("/api/movies", json={"title": "Inception", "year": 2010, "tags": ["Sci-Fi"]})
    assert r.status_code == 201
    movie_id = r.json()["id"]

    r = client.get(f"/api/movies/{movie_id}")
    assert r.json()["review_count"] == 0
    assert r.json()["average_rating"] == 0.0

    r = client.post("/api/reviews", json={"movie_id": movie_id, "rating": 4, "title": "Good"})
    assert r.status_code == 201
    assert r.json()["username"] == "kim"

    r = client.get(f"/api/movies/{movie_id}")
    assert r.status_code == 200
    data = r.json()
    assert data["review_count"] == 1
    assert data["average_rating"] == 4.0

    home = client.get("/")
    assert "Inception" in home.text
    assert "kim" in home.text


def test_admin_cleans_up_after_user(client, make_user, session_store):
    """An admin removes a reviewer; their review disappears from the stats."""
    make_user("root", role="admin")
    reviewer = make_user("lee")

    client.post("/login", data={"email": "lee@example.com", "password": "secret123"},
                follow_redirects=False)
    movie_id = client.post("/api/movies", json={"title": "Heat", "year": 1995}).json()["id"]
    client.post("/api/reviews", json={"movie_id": movie_id, "rating": 2})
    assert client.get(f"/api/movies/{movie_id}").json()["review_count"] == 1

    client.get("/logout", follow_redirects=False)
    client.post("/login", data={"email": "root@example.com", "password": "secret123"},
                follow_redirects=False)
    r = client.post(f"/admin/delete-user/{reviewer.id}", follow_redirects=False)
    assert r.status_code == 303

    data = client.get(f"/api/movies/{movie_id}").json()
    assert data["review_count"] == 0
    assert data["average_rating"] == 0.0
