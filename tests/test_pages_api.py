"""Tests for page endpoints."""

import pytest

from tests.conftest import login, make_page, make_project, make_user


@pytest.fixture()
def project(auth_client):
    return make_project(auth_client, "Acme API")


class TestCreatePage:

    def test_new_page_is_empty_draft(self, auth_client, project):
        created = make_page(auth_client, project, "Getting Started", section="Guides")
        assert created["success"] is True
        assert created["slug"] == "getting-started"

        page = auth_client.get(f"/api/projects/{project}/pages/getting-started").json()
        assert page["id"] == created["id"]
        assert page["content"] == ""
        assert page["is_published"] is False
        assert page["section"] == "Guides"

    def test_pages_appended_in_order(self, auth_client, project):
        make_page(auth_client, project, "Second")
        make_page(auth_client, project, "Third")
        pages = auth_client.get(f"/api/projects/{project}/pages").json()
        assert [p["slug"] for p in pages] == ["introduction", "second", "third"]
        assert [p["order"] for p in pages] == [0, 1, 2]
        assert [p["status"] for p in pages] == ["Published", "Draft", "Draft"]

    def test_blank_title_rejected(self, auth_client, project):
        resp = auth_client.post(f"/api/projects/{project}/pages", json={"title": "   "})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Title cannot be empty"

    def test_duplicate_slug_rejected(self, auth_client, project):
        make_page(auth_client, project, "Setup")
        resp = auth_client.post(f"/api/projects/{project}/pages", json={"title": "setup"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "A page with this slug already exists"

    def test_same_slug_allowed_in_another_project(self, auth_client, project):
        other = make_project(auth_client, "Widgets")
        make_page(auth_client, project, "Setup")
        assert make_page(auth_client, other, "Setup")["slug"] == "setup"

    def test_requires_ownership(self, client, db, user):
        login(client)
        slug = make_project(client)
        client.cookies.clear()

        make_user(db, name="Eve", email="eve@example.com")
        login(client, email="eve@example.com")
        resp = client.post(f"/api/projects/{slug}/pages", json={"title": "Hijack"})
        assert resp.status_code == 404


class TestUpdatePage:

    def test_save_content(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/content", json={"content": "# Setup\n\nRun it."})
        assert resp.status_code == 200
        assert auth_client.get(f"/api/projects/{project}/pages/setup").json()["content"] == "# Setup\n\nRun it."

    def test_last_write_wins(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        auth_client.put(f"/api/pages/{page['id']}/content", json={"content": "first"})
        auth_client.put(f"/api/pages/{page['id']}/content", json={"content": "second"})
        assert auth_client.get(f"/api/projects/{project}/pages/setup").json()["content"] == "second"

    def test_publish_and_unpublish(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/publish", json={"is_published": True})
        assert resp.json() == {"success": True, "status": "Published"}
        resp = auth_client.put(f"/api/pages/{page['id']}/publish", json={"is_published": False})
        assert resp.json()["status"] == "Draft"

    def test_update_title_trims(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/title", json={"title": "  Installation  "})
        assert resp.json()["title"] == "Installation"
        # The slug is not derived again from a new title.
        assert auth_client.get(f"/api/projects/{project}/pages/setup").json()["title"] == "Installation"

    def test_blank_title_rejected(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/title", json={"title": " "})
        assert resp.status_code == 400

    def test_update_slug_sanitises(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/slug", json={"slug": "Install Guide!"})
        assert resp.json() == {"success": True, "slug": "install-guide"}
        assert auth_client.get(f"/api/projects/{project}/pages/install-guide").json()["id"] == page["id"]

    def test_update_slug_conflict(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/slug", json={"slug": "introduction"})
        assert resp.status_code == 409

    def test_update_slug_to_itself(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/slug", json={"slug": "setup"})
        assert resp.status_code == 200

    def test_update_section(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        resp = auth_client.put(f"/api/pages/{page['id']}/section", json={"section": " Guides "})
        assert resp.json()["section"] == "Guides"

    def test_unknown_page(self, auth_client):
        resp = auth_client.put("/api/pages/does-not-exist/content", json={"content": "x"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "Page not found"

    def test_non_owner_sees_not_found(self, client, db, user):
        login(client)
        slug = make_project(client)
        page = make_page(client, slug, "Setup")
        client.cookies.clear()

        make_user(db, name="Eve", email="eve@example.com")
        login(client, email="eve@example.com")
        resp = client.put(f"/api/pages/{page['id']}/content", json={"content": "defaced"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "Page not found"

    def test_requires_session(self, client):
        resp = client.put("/api/pages/anything/content", json={"content": "x"})
        assert resp.status_code == 401


class TestDeletePage:

    def test_delete(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        assert auth_client.delete(f"/api/pages/{page['id']}").status_code == 200
        assert auth_client.get(f"/api/projects/{project}/pages/setup").json() is None

    def test_content_save_evicts_reader_cache(self, auth_client, project):
        page = make_page(auth_client, project, "Setup")
        assert auth_client.get(f"/p/{project}?page=setup").json()["active_page"]["content"] == ""
        auth_client.put(f"/api/pages/{page['id']}/content", json={"content": "fresh"})
        assert auth_client.get(f"/p/{project}?page=setup").json()["active_page"]["content"] == "fresh"
