"""Tests for view tracking and project analytics."""

from datetime import timedelta

from chameleon_docs.database import utcnow
from chameleon_docs.models import Page, PageView
from chameleon_docs.services import AnalyticsService
from tests.conftest import make_page, make_project


def _track(client, page_id, ip="203.0.113.1"):
    return client.post(f"/api/analytics/pages/{page_id}/views", headers={"X-Forwarded-For": ip})


def _page_id(db, slug):
    return db.query(Page).filter(Page.slug == slug).one().id


class TestTrackView:

    def test_views_increment_by_one(self, auth_client, db):
        slug = make_project(auth_client)
        page_id = _page_id(db, "introduction")
        db.query(Page).filter(Page.id == page_id).update({Page.views: 5})
        db.commit()

        for _ in range(3):
            resp = _track(auth_client, page_id)
            assert resp.status_code == 200
            assert resp.json() == {"counted": True, "reason": None}

        db.expire_all()
        assert db.get(Page, page_id).views == 8
        assert db.query(PageView).count() == 3
        assert auth_client.get(f"/api/analytics/projects/{slug}").json()["total_views"] == 8

    def test_unknown_page_is_not_an_error(self, client):
        resp = _track(client, "missing-page")
        assert resp.status_code == 200
        assert resp.json() == {"counted": False, "reason": "error"}

    def test_records_ip_and_user_agent(self, auth_client, db):
        make_project(auth_client)
        page_id = _page_id(db, "introduction")
        auth_client.post(
            f"/api/analytics/pages/{page_id}/views",
            headers={"X-Forwarded-For": "198.51.100.2, 10.0.0.1", "User-Agent": "pytest-agent"},
        )
        view = db.query(PageView).one()
        assert view.ip_address == "198.51.100.2"
        assert view.user_agent == "pytest-agent"

    def test_dedupe_when_enabled(self, auth_client, db):
        make_project(auth_client)
        page_id = _page_id(db, "introduction")
        service = AnalyticsService(db)

        assert service.record_view(page_id, "203.0.113.1", dedupe=True) == {"counted": True}
        assert service.record_view(page_id, "203.0.113.1", dedupe=True) == {
            "counted": False,
            "reason": "duplicate",
        }
        assert service.record_view(page_id, "203.0.113.2", dedupe=True) == {"counted": True}

    def test_dedupe_ignores_expired_views(self, auth_client, db):
        make_project(auth_client)
        page_id = _page_id(db, "introduction")
        db.add(PageView(page_id=page_id, ip_address="203.0.113.1", created_at=utcnow() - timedelta(hours=25)))
        db.commit()

        result = AnalyticsService(db).record_view(page_id, "203.0.113.1", dedupe=True)
        assert result == {"counted": True}


class TestProjectAnalytics:

    def test_top_pages_limited_to_five(self, auth_client, db):
        slug = make_project(auth_client)
        for i in range(6):
            make_page(auth_client, slug, f"Page {i}")
        for i, page in enumerate(db.query(Page).filter(Page.slug.like("page-%")).all()):
            page.views = (i + 1) * 10
        db.commit()

        data = auth_client.get(f"/api/analytics/projects/{slug}").json()
        assert data["total_views"] == sum((i + 1) * 10 for i in range(6))
        assert len(data["top_pages"]) == 5
        views = [p["views"] for p in data["top_pages"]]
        assert views == sorted(views, reverse=True)
        assert views[0] == 60

    def test_unknown_project_is_null(self, client):
        resp = client.get("/api/analytics/projects/nope")
        assert resp.status_code == 200
        assert resp.json() is None


class TestRecentVisitors:

    def test_counts_distinct_ips_within_window(self, auth_client, db):
        slug = make_project(auth_client)
        page_id = _page_id(db, "introduction")
        _track(auth_client, page_id, "203.0.113.1")
        _track(auth_client, page_id, "203.0.113.1")
        _track(auth_client, page_id, "203.0.113.2")
        db.add(PageView(page_id=page_id, ip_address="203.0.113.9", created_at=utcnow() - timedelta(hours=30)))
        db.commit()

        assert auth_client.get(f"/api/analytics/projects/{slug}/visitors").json() == {"count": 2}

    def test_unknown_project_zero(self, client):
        assert client.get("/api/analytics/projects/nope/visitors").json() == {"count": 0}


class TestCleanup:

    def test_purges_only_expired(self, auth_client, db):
        make_project(auth_client)
        page_id = _page_id(db, "introduction")
        db.add(PageView(page_id=page_id, ip_address="a", created_at=utcnow() - timedelta(hours=25)))
        db.add(PageView(page_id=page_id, ip_address="b", created_at=utcnow() - timedelta(hours=23)))
        db.commit()

        resp = auth_client.post("/api/analytics/cleanup")
        assert resp.json() == {"deleted": 1}
        assert [v.ip_address for v in db.query(PageView).all()] == ["b"]

    def test_cleanup_with_explicit_clock(self, auth_client, db):
        make_project(auth_client)
        page_id = _page_id(db, "introduction")
        AnalyticsService(db).record_view(page_id, "203.0.113.1")
        later = utcnow() + timedelta(hours=25)
        assert AnalyticsService(db).cleanup_expired(now=later) == 1
