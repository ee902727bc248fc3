"""
API tests for the admin delete endpoints.
"""

from cinerank.database import crud
from cinerank.database.models import Review


class TestAdminDeletes:
    """POST /admin/delete-user/{id} and /admin/delete-movie/{id}."""

    def test_delete_user(self, admin_client, make_user, session, session_store):
        victim_id = make_user("ivan").id
        token = session_store.create(victim_id)

        r = admin_client.post(f"/admin/delete-user/{victim_id}", follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/admin"

        session.expire_all()
        assert crud.get_user_by_id(session, victim_id) is None
        assert session_store.get(token) is None

    def test_delete_user_cascades_reviews(self, admin_client, make_user, session):
        victim = make_user("ivan")
        movie = crud.create_movie(session, title="Heat", year=1995)
        review_id = crud.create_review(session, movie_id=movie.id, user_id=victim.id, rating=3).id

        admin_client.post(f"/admin/delete-user/{victim.id}", follow_redirects=False)

        session.expire_all()
        assert session.get(Review, review_id) is None
        assert crud.get_movie_by_id(session, movie.id).review_count == 0

    def test_cannot_delete_self(self, admin_client):
        r = admin_client.post(f"/admin/delete-user/{admin_client.user_id}")
        assert r.status_code == 400
        assert "Cannot delete yourself" in r.text

    def test_delete_missing_user(self, admin_client):
        r = admin_client.post("/admin/delete-user/4242")
        assert r.status_code == 404

    def test_delete_user_invalid_id(self, admin_client):
        r = admin_client.post("/admin/delete-user/abc")
        assert r.status_code == 400

    def test_delete_movie(self, admin_client, session, make_user):
        user = make_user("judy")
        movie_id = crud.create_movie(session, title="Heat", year=1995, tags=["Crime"]).id
        crud.create_review(session, movie_id=movie_id, user_id=user.id, rating=4)

        r = admin_client.post(f"/admin/delete-movie/{movie_id}", follow_redirects=False)
        assert r.status_code == 303

        session.expire_all()
        assert crud.get_movie(session, movie_id) is None
        assert crud.get_review_count(session) == 0

    def test_delete_missing_movie(self, admin_client):
        r = admin_client.post("/admin/delete-movie/4242")
        assert r.status_code == 404

    def test_regular_user_cannot_delete(self, user_client, session):
        movie = crud.create_movie(session, title="Heat", year=1995)
        r = user_client.post(f"/admin/delete-movie/{movie.id}")
        assert r.status_code == 403
        assert crud.get_movie_count(session) == 1
