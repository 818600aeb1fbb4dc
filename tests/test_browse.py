"""
Browse retrieval tests.

Pages are cut in storage order (newest first); with a viewer, each page drops the
viewer's own projects and is re-sorted by match score within the page.

Run:
    pytest tests/test_browse.py -v
"""

from matching.models.query import ProjectQuery
from matching.models.profile import UserProfile
from matching.results import ErrorKind
from matching.stages.browse import normalize_page, retrieve_projects

from conftest import project_doc, ts


class FailingSource:
    def find_projects(self, query, skip=0, limit=None):
        raise ConnectionError("database unreachable")

    def count_projects(self, query):
        raise ConnectionError("database unreachable")


class MalformedSource:
    """Returns a stored doc whose list field was written as null."""

    def find_projects(self, query, skip=0, limit=None):
        return [dict(project_doc("bad", ts(1)), tech_stack=None)]

    def count_projects(self, query):
        return 1


def _twenty_five(project_store_factory):
    return project_store_factory([project_doc(f"p{i:02d}", ts(i)) for i in range(25)])


class TestPagination:
    def test_last_page(self, project_store_factory):
        store = _twenty_five(project_store_factory)
        result = retrieve_projects(store, ProjectQuery(), page=3, page_size=12)
        assert result.success
        page = result.data
        assert len(page.items) == 1
        assert page.pagination.total_count == 25
        assert page.pagination.total_pages == 3
        assert page.pagination.has_more is False

    def test_has_more_on_earlier_pages(self, project_store_factory):
        store = _twenty_five(project_store_factory)
        for n in (1, 2):
            result = retrieve_projects(store, ProjectQuery(), page=n, page_size=12)
            assert len(result.data.items) == 12
            assert result.data.pagination.has_more is True

    def test_newest_first_without_viewer(self, project_store_factory):
        store = _twenty_five(project_store_factory)
        items = retrieve_projects(store, ProjectQuery(), page=1, page_size=3).data.items
        assert [s.project.id for s in items] == ["p24", "p23", "p22"]
        assert all(s.score is None for s in items)

    def test_page_beyond_end_is_empty(self, project_store_factory):
        store = _twenty_five(project_store_factory)
        result = retrieve_projects(store, ProjectQuery(), page=9, page_size=12)
        assert result.data.items == []
        assert result.data.pagination.has_more is False

    def test_page_below_one_is_first_page(self, project_store_factory):
        store = _twenty_five(project_store_factory)
        assert normalize_page(0) == 1
        assert normalize_page(-3) == 1
        assert normalize_page(None) == 1
        result = retrieve_projects(store, ProjectQuery(), page=0, page_size=12)
        assert result.data.pagination.page == 1
        assert result.data.items[0].project.id == "p24"

    def test_non_positive_page_size_is_rejected(self, project_store_factory):
        store = _twenty_five(project_store_factory)
        result = retrieve_projects(store, ProjectQuery(), page=1, page_size=0)
        assert not result
        assert result.kind == ErrorKind.VALIDATION_ERROR

    def test_empty_store(self, project_store_factory):
        result = retrieve_projects(project_store_factory([]), ProjectQuery(), page=1, page_size=12)
        assert result.data.items == []
        assert result.data.pagination.total_pages == 0


class TestViewerScoring:
    def test_scores_and_resorts_within_page(self, project_store_factory, beginner_viewer):
        store = project_store_factory(
            [
                project_doc("weak", ts(3), tech_stack=["Rust"], experience_level="Advanced"),
                project_doc("strong", ts(2), tech_stack=["React", "TypeScript"]),
                project_doc("mid", ts(1), tech_stack=["React", "Go"]),
            ]
        )
        items = retrieve_projects(store, ProjectQuery(), page=1, page_size=12, viewer=beginner_viewer).data.items
        assert [s.project.id for s in items] == ["strong", "mid", "weak"]
        # incomplete viewer: 60 + 20 + 10, 30 + 20 + 10, 0 + 5 + 10
        assert [s.score for s in items] == [90, 60, 15]

    def test_scores_never_cross_pages(self, project_store_factory, beginner_viewer):
        # newest (page 1) is a poor match, oldest (page 2) a perfect one
        store = project_store_factory(
            [
                project_doc("newest", ts(2), tech_stack=["Rust"]),
                project_doc("oldest", ts(1), tech_stack=["React", "TypeScript"]),
            ]
        )
        first = retrieve_projects(store, ProjectQuery(), page=1, page_size=1, viewer=beginner_viewer).data
        second = retrieve_projects(store, ProjectQuery(), page=2, page_size=1, viewer=beginner_viewer).data
        assert [s.project.id for s in first.items] == ["newest"]
        assert [s.project.id for s in second.items] == ["oldest"]

    def test_viewer_projects_excluded_but_counted(self, project_store_factory, beginner_viewer):
        store = project_store_factory(
            [
                project_doc("mine", ts(3), owner_id=beginner_viewer.id),
                project_doc("a", ts(2)),
                project_doc("b", ts(1)),
            ]
        )
        page = retrieve_projects(store, ProjectQuery(), page=1, page_size=12, viewer=beginner_viewer).data
        assert {s.project.id for s in page.items} == {"a", "b"}
        assert page.pagination.total_count == 3

    def test_anonymous_sees_own_projects_unscored(self, project_store_factory):
        store = project_store_factory([project_doc("mine", ts(1), owner_id="viewer")])
        page = retrieve_projects(store, ProjectQuery(), page=1, page_size=12).data
        assert [s.project.id for s in page.items] == ["mine"]

    def test_ties_keep_storage_order(self, project_store_factory):
        viewer = UserProfile(id="viewer", skills=["Go"])
        store = project_store_factory(
            [project_doc(f"t{i}", ts(i), tech_stack=["Go"]) for i in range(4)]
        )
        items = retrieve_projects(store, ProjectQuery(), page=1, page_size=12, viewer=viewer).data.items
        assert [s.project.id for s in items] == ["t3", "t2", "t1", "t0"]


class TestFilters:
    def test_filters_apply_before_pagination(self, project_store_factory):
        store = project_store_factory(
            [
                project_doc("go1", ts(4), tech_stack=["Go"], category="DevTools"),
                project_doc("go2", ts(3), tech_stack=["Go", "React"]),
                project_doc("js", ts(2), tech_stack=["React"]),
                project_doc("done", ts(1), tech_stack=["Go"], status="Completed"),
            ]
        )
        query = ProjectQuery(tech_stack=["Go"], status="Looking for collaborators")
        page = retrieve_projects(store, query, page=1, page_size=12).data
        assert [s.project.id for s in page.items] == ["go1", "go2"]
        assert page.pagination.total_count == 2

    def test_keyword_search(self, project_store_factory):
        store = project_store_factory(
            [
                project_doc("chat", ts(2), title="Realtime Chat"),
                project_doc("todo", ts(1), title="Todo list"),
            ]
        )
        page = retrieve_projects(store, ProjectQuery(keywords="CHAT"), page=1, page_size=12).data
        assert [s.project.id for s in page.items] == ["chat"]


def test_storage_failure_is_reported():
    result = retrieve_projects(FailingSource(), ProjectQuery(), page=1, page_size=12)
    assert not result
    assert result.kind == ErrorKind.STORAGE_UNAVAILABLE
    assert result.message == "Failed to fetch projects"


def test_malformed_stored_project_is_reported(beginner_viewer):
    result = retrieve_projects(MalformedSource(), ProjectQuery(), page=1, page_size=12, viewer=beginner_viewer)
    assert result.kind == ErrorKind.STORAGE_UNAVAILABLE
    assert result.message == "Failed to fetch projects"
