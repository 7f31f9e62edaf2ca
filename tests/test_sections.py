"""Tests for section grouping, ordering and the section-order endpoint."""

from types import SimpleNamespace

from chameleon_docs.services.section_service import (
    UNCATEGORIZED,
    build_sections,
    move_section,
    ordered_section_names,
    persistable_order,
    section_label,
)
from tests.conftest import make_page, make_project


def _page(slug, section=""):
    return SimpleNamespace(slug=slug, section=section)


class TestSectionHelpers:

    def test_blank_label_is_uncategorized(self):
        assert section_label("") == UNCATEGORIZED
        assert section_label("   ") == UNCATEGORIZED
        assert section_label(None) == UNCATEGORIZED
        assert section_label(" Guides ") == "Guides"

    def test_persistable_order_drops_uncategorized_and_duplicates(self):
        assert persistable_order(["B", "Uncategorized", " A ", "B", ""]) == ["B", "A"]

    def test_ordered_names_follow_stored_order_then_first_appearance(self):
        labels = ["Guides", "Reference", "FAQ", "Guides"]
        assert ordered_section_names(labels, ["FAQ", "Missing"]) == ["FAQ", "Guides", "Reference"]

    def test_build_sections_uncategorized_first(self):
        pages = [_page("a", "Guides"), _page("b"), _page("c", "Reference"), _page("d", "Guides")]
        sections = build_sections(pages, ["Reference"])
        assert [name for name, _ in sections] == [UNCATEGORIZED, "Reference", "Guides"]
        assert [p.slug for p in sections[2][1]] == ["a", "d"]

    def test_build_sections_omits_uncategorized_when_empty(self):
        sections = build_sections([_page("a", "Guides")], [])
        assert [name for name, _ in sections] == ["Guides"]


class TestMoveSection:

    def test_move_onto_next(self):
        assert move_section(["A", "B", "C"], "A", "B") == ["B", "A", "C"]

    def test_move_backwards(self):
        assert move_section(["A", "B", "C"], "C", "A") == ["C", "A", "B"]

    def test_input_not_mutated(self):
        order = ["A", "B", "C"]
        move_section(order, "A", "C")
        assert order == ["A", "B", "C"]

    def test_noop_cases(self):
        order = ["A", "B"]
        assert move_section(order, "A", "A") == order
        assert move_section(order, "A", "Z") == order
        assert move_section(order, UNCATEGORIZED, "A") == order
        assert move_section(order, "A", UNCATEGORIZED) == order


class TestSectionEndpoints:

    def test_sections_listing(self, auth_client):
        slug = make_project(auth_client)
        make_page(auth_client, slug, "Setup", section="Guides")
        make_page(auth_client, slug, "Endpoints", section="Reference")

        sections = auth_client.get(f"/api/projects/{slug}/sections").json()
        assert [s["name"] for s in sections] == [UNCATEGORIZED, "Guides", "Reference"]
        assert [s["draggable"] for s in sections] == [False, True, True]
        assert [p["slug"] for p in sections[0]["pages"]] == ["introduction"]

    def test_drag_result_is_persisted(self, auth_client):
        slug = make_project(auth_client)
        for title, section in (("One", "A"), ("Two", "B"), ("Three", "C")):
            make_page(auth_client, slug, title, section=section)

        new_order = move_section(["A", "B", "C"], "A", "B")
        resp = auth_client.put(
            f"/api/projects/{slug}/section-order",
            json={"order": [UNCATEGORIZED] + new_order},
        )
        assert resp.status_code == 200
        assert resp.json()["order"] == ["B", "A", "C"]

        project = auth_client.get(f"/api/projects/{slug}").json()
        assert project["section_order"] == ["B", "A", "C"]
        names = [s["name"] for s in auth_client.get(f"/api/projects/{slug}/sections").json()]
        assert names == [UNCATEGORIZED, "B", "A", "C"]

    def test_unknown_project_sections_empty(self, client):
        assert client.get("/api/projects/nope/sections").json() == []

    def test_order_requires_session(self, client):
        resp = client.put("/api/projects/acme-api/section-order", json={"order": ["A"]})
        assert resp.status_code == 401
