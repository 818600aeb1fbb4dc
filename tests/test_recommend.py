"""
Dashboard recommendation tests.

Recommendations scan every open project not owned by the viewer, keep those
scoring at least the floor (40), and return the top N (5) by score.

Run:
    pytest tests/test_recommend.py -v
"""

from matching.models.config import MatchingConfig
from matching.results import ErrorKind
from matching.stages.recommend import recommend_for

from conftest import project_doc, ts
from test_browse import FailingSource, MalformedSource


def test_floor_is_inclusive(project_store_factory, beginner_viewer):
    # A: 2/5 skills, Advanced vs Beginner, incomplete -> 24 + 5 + 10 = 39
    # B: 1/3 skills, Intermediate vs Beginner, incomplete -> 20 + 10 + 10 = 40
    store = project_store_factory(
        [
            project_doc(
                "A",
                ts(2),
                tech_stack=["React", "TypeScript", "Node.js", "MongoDB", "Docker"],
                experience_level="Advanced",
            ),
            project_doc("B", ts(1), tech_stack=["React", "GraphQL", "Redis"], experience_level="Intermediate"),
        ]
    )
    result = recommend_for(store, beginner_viewer)
    assert result.success
    assert [(s.project.id, s.score) for s in result.data] == [("B", 40)]


def test_excludes_own_and_closed_projects(project_store_factory, beginner_viewer):
    perfect = ["React", "TypeScript"]
    store = project_store_factory(
        [
            project_doc("mine", ts(4), owner_id=beginner_viewer.id, tech_stack=perfect),
            project_doc("busy", ts(3), tech_stack=perfect, status="In Progress"),
            project_doc("done", ts(2), tech_stack=perfect, status="Completed"),
            project_doc("open", ts(1), tech_stack=perfect),
        ]
    )
    result = recommend_for(store, beginner_viewer)
    assert [s.project.id for s in result.data] == ["open"]


def test_global_top_n(project_store_factory, beginner_viewer):
    # best matches are the oldest projects; a page-local sort would miss them
    docs = [project_doc(f"old{i}", ts(i), tech_stack=["React", "TypeScript"]) for i in range(3)]
    docs += [project_doc(f"new{i}", ts(100 + i), tech_stack=["React", "Go"]) for i in range(20)]
    store = project_store_factory(docs)
    result = recommend_for(store, beginner_viewer)
    ids = [s.project.id for s in result.data]
    assert len(ids) == 5
    assert ids[:3] == ["old2", "old1", "old0"]
    assert [s.score for s in result.data] == [90, 90, 90, 60, 60]


def test_ties_break_newest_first(project_store_factory, beginner_viewer):
    store = project_store_factory(
        [project_doc(f"p{i}", ts(i), tech_stack=["React"]) for i in (3, 1, 2)]
    )
    result = recommend_for(store, beginner_viewer)
    assert [s.project.id for s in result.data] == ["p3", "p2", "p1"]


def test_limit(project_store_factory, beginner_viewer):
    store = project_store_factory([project_doc(f"p{i}", ts(i), tech_stack=["React"]) for i in range(8)])
    assert len(recommend_for(store, beginner_viewer, limit=2).data) == 2
    assert recommend_for(store, beginner_viewer, limit=0).data == []
    assert len(recommend_for(store, beginner_viewer, limit=50).data) == 8


def test_negative_limit_is_rejected(project_store_factory, beginner_viewer):
    result = recommend_for(project_store_factory([]), beginner_viewer, limit=-1)
    assert result.kind == ErrorKind.VALIDATION_ERROR


def test_configured_floor_and_limit(project_store_factory, beginner_viewer):
    store = project_store_factory(
        [project_doc(f"p{i}", ts(i), tech_stack=["React", "Go"]) for i in range(4)]
    )
    config = MatchingConfig(recommendation_floor=61, recommendation_limit=2)
    assert recommend_for(store, beginner_viewer, config=config).data == []
    config = MatchingConfig(recommendation_floor=60, recommendation_limit=2)
    assert len(recommend_for(store, beginner_viewer, config=config).data) == 2


def test_empty_pool(project_store_factory, beginner_viewer):
    assert recommend_for(project_store_factory([]), beginner_viewer).data == []


def test_storage_failure(beginner_viewer):
    result = recommend_for(FailingSource(), beginner_viewer)
    assert result.kind == ErrorKind.STORAGE_UNAVAILABLE


def test_malformed_stored_project(beginner_viewer):
    result = recommend_for(MalformedSource(), beginner_viewer)
    assert result.kind == ErrorKind.STORAGE_UNAVAILABLE
    assert result.message == "Failed to fetch recommendations"
