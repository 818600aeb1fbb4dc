"""Project action tests: validation, ownership, listing, and the ranked views."""

import pytest

from matching.models.profile import UserProfile
from matching.models.query import ProjectQuery
from matching.results import ErrorKind
from server.services import interests, projects
from server.services.projects import clean_project_fields


@pytest.fixture
def owner(repos) -> UserProfile:
    return UserProfile.model_validate(repos.users.create("Olive", "olive@example.com"))


@pytest.fixture
def other(repos) -> UserProfile:
    return UserProfile.model_validate(
        repos.users.create(
            "Otto", "otto@example.com", skills=["Go", "React"], bio="hi", location="Riga"
        )
    )


def _create(repos, user, **overrides):
    data = {"title": "CLI tool", "description": "A terminal helper", "tech_stack": ["Go"]}
    data.update(overrides)
    return projects.create_project(repos, user, data)


class TestCleanProjectFields:
    def test_defaults_filled_on_create(self):
        fields, err = clean_project_fields({"title": " T ", "description": "D", "tech_stack": "Go, React, Go"})
        assert err is None
        assert fields["title"] == "T"
        assert fields["tech_stack"] == ["Go", "React"]
        assert fields["category"] == "Web App"
        assert fields["status"] == "Looking for collaborators"

    @pytest.mark.parametrize(
        "data,message",
        [
            ({"title": "", "description": "D"}, "Title cannot be empty"),
            ({"title": "T", "description": "  "}, "Description cannot be empty"),
            ({"title": "T", "description": "D", "short_description": "x" * 101},
             "Short description must be at most 100 characters"),
        ],
    )
    def test_required_text(self, data, message):
        fields, err = clean_project_fields(data)
        assert fields is None
        assert err.message == message

    def test_enum_values_checked(self):
        _, err = clean_project_fields({"title": "T", "description": "D", "category": "Spaceship"})
        assert err.kind == ErrorKind.VALIDATION_ERROR

    def test_partial_only_touches_supplied_fields(self):
        fields, err = clean_project_fields({"status": "Completed"}, partial=True)
        assert err is None
        assert fields == {"status": "Completed"}


class TestCrud:
    def test_create(self, repos, owner):
        project = _create(repos, owner).data
        assert project.owner_id == owner.id
        assert project.interest_count == 0
        assert projects.get_project(repos, project.id).data.title == "CLI tool"

    def test_create_requires_user(self, repos):
        assert _create(repos, None).kind == ErrorKind.UNAUTHORIZED

    def test_update_by_owner(self, repos, owner):
        project = _create(repos, owner).data
        result = projects.update_project(repos, owner, project.id, {"status": "In Progress", "owner_id": "x"})
        assert result.data.status == "In Progress"
        assert result.data.owner_id == owner.id

    def test_update_by_other_is_forbidden(self, repos, owner, other):
        project = _create(repos, owner).data
        result = projects.update_project(repos, other, project.id, {"title": "Mine now"})
        assert result.kind == ErrorKind.FORBIDDEN
        assert projects.get_project(repos, project.id).data.title == "CLI tool"

    def test_delete_by_other_is_forbidden(self, repos, owner, other):
        project = _create(repos, owner).data
        assert projects.delete_project(repos, other, project.id).kind == ErrorKind.FORBIDDEN
        assert projects.get_project(repos, project.id).success

    def test_missing_project(self, repos, owner):
        assert projects.get_project(repos, "missing").kind == ErrorKind.NOT_FOUND
        assert projects.update_project(repos, owner, "missing", {}).kind == ErrorKind.NOT_FOUND

    def test_list_mine_and_by_owner(self, repos, owner, other):
        _create(repos, owner)
        _create(repos, owner, title="Second")
        _create(repos, other)
        assert len(projects.list_my_projects(repos, owner).data) == 2
        assert len(projects.list_projects_by_owner(repos, other.id).data) == 1
        assert projects.list_projects_by_owner(repos, " ").kind == ErrorKind.VALIDATION_ERROR


class TestRankedViews:
    def test_browse_scores_for_viewer(self, repos, owner, other):
        _create(repos, owner, tech_stack=["Go", "React"])
        page = projects.browse_projects(repos, ProjectQuery(), 1, 12, current=other).data
        # complete viewer, full coverage, both Beginner
        assert page.items[0].score == 100

    def test_recommended_requires_user(self, repos):
        result = projects.recommended_projects(repos, None)
        assert result.kind == ErrorKind.UNAUTHORIZED

    def test_recommended(self, repos, owner, other):
        _create(repos, owner, tech_stack=["Go"])
        _create(repos, other, tech_stack=["Go"])
        result = projects.recommended_projects(repos, other)
        assert [s.project.owner_id for s in result.data] == [owner.id]

    def test_interested_users_owner_only(self, repos, owner, other):
        project = _create(repos, owner).data
        interests.show_interest(repos, other, project.id)
        ranked = projects.interested_users(repos, owner, project.id).data
        assert [u.user.id for u in ranked] == [other.id]
        assert ranked[0].matching_skills == ["Go"]
        assert projects.interested_users(repos, other, project.id).kind == ErrorKind.FORBIDDEN
        assert projects.interested_users(repos, owner, "missing").kind == ErrorKind.NOT_FOUND
