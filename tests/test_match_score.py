"""
Match scorer tests.

score = round_half_up(skill_pct * 0.6 + exp_pct * 0.2 + compl_pct * 0.2)
  skill_pct: share of the target's distinct tech the viewer has
  exp_pct:   100 / 50 / 25 by level distance 0 / 1 / >=2
  compl_pct: 100 complete profile, 50 otherwise

Run:
    pytest tests/test_match_score.py -v
"""

import itertools

import pytest

from matching.models.config import MatchingConfig
from matching.models.profile import UserProfile
from matching.models.project import Project
from matching.stages.match_score import (
    compute_match_score,
    experience_index,
    matching_skills,
    score_profile_against_project,
)


class TestComputeMatchScore:
    def test_perfect_match(self):
        score = compute_match_score(["React", "Node.js"], "Intermediate", True, ["React", "Node.js"], "Intermediate")
        assert score == 100

    def test_worst_case_is_fifteen(self):
        # 0 skills, distance 2 (25 * 0.2 = 5), incomplete (50 * 0.2 = 10)
        score = compute_match_score([], "Beginner", False, ["Rust"], "Advanced")
        assert score == 15

    def test_half_rounds_up(self):
        # 1/8 skills -> 12.5 * 0.6 = 7.5; 7.5 + 20 + 20 = 47.5 -> 48
        target = ["A", "B", "C", "D", "E", "F", "G", "H"]
        assert compute_match_score(["A"], "Beginner", True, target, "Beginner") == 48

    def test_one_third_coverage_does_not_round_down(self):
        # 33.33... * 0.6 = 20.0 (not 19.99...), 20 + 10 + 10 = 40
        score = compute_match_score(["React"], "Beginner", False, ["React", "GraphQL", "Redis"], "Intermediate")
        assert score == 40

    def test_empty_target_stack_scores_zero_skills(self):
        # 0 + 100 * 0.2 + 100 * 0.2
        assert compute_match_score(["React"], "Beginner", True, [], "Beginner") == 40

    def test_extra_viewer_skills_do_not_matter(self):
        base = compute_match_score(["React"], "Beginner", True, ["React", "Vue"], "Beginner")
        more = compute_match_score(["React", "Go", "Rust", "Elixir"], "Beginner", True, ["React", "Vue"], "Beginner")
        assert base == more == 70

    def test_duplicate_target_entries_count_once(self):
        score = compute_match_score(["React"], "Beginner", True, ["React", "React", "Vue"], "Beginner")
        assert score == 70

    def test_skill_match_is_case_sensitive(self):
        assert compute_match_score(["react"], "Beginner", True, ["React"], "Beginner") == 40

    def test_experience_distance(self):
        assert compute_match_score([], "Beginner", True, ["X"], "Beginner") == 40
        assert compute_match_score([], "Beginner", True, ["X"], "Intermediate") == 30
        assert compute_match_score([], "Beginner", True, ["X"], "Advanced") == 25

    def test_unknown_experience_counts_as_beginner(self):
        assert compute_match_score([], "Beginner", True, ["X"], "Any") == 40
        assert compute_match_score([], None, True, ["X"], "Beginner") == 40
        assert compute_match_score([], "Guru", True, ["X"], "Advanced") == 25

    def test_custom_weights(self):
        config = MatchingConfig(weight_skills=1.0, weight_experience=0.0, weight_completeness=0.0)
        assert compute_match_score(["A"], "Beginner", False, ["A", "B"], "Advanced", config) == 50

    def test_deterministic_and_in_range(self):
        stacks = [[], ["React"], ["React", "Node.js"], ["Go", "Rust", "Zig"]]
        levels = ["Beginner", "Intermediate", "Advanced", "Any", ""]
        for viewer, target, v_exp, t_exp, complete in itertools.product(
            stacks, stacks, levels, levels, (True, False)
        ):
            first = compute_match_score(viewer, v_exp, complete, target, t_exp)
            second = compute_match_score(viewer, v_exp, complete, target, t_exp)
            assert first == second
            assert 0 <= first <= 100
            assert isinstance(first, int)


class TestHelpers:
    def test_experience_index(self):
        assert experience_index("Beginner") == 0
        assert experience_index("Intermediate") == 1
        assert experience_index("Advanced") == 2
        assert experience_index("Any") == 0

    def test_matching_skills_in_target_order(self):
        assert matching_skills(["Vue", "React", "Node.js", "React"], ["Node.js", "React"]) == ["React", "Node.js"]

    @pytest.mark.parametrize("viewer_skills", [[], ["Python"]])
    def test_matching_skills_none(self, viewer_skills):
        assert matching_skills(["React"], viewer_skills) == []


def test_score_profile_against_project_uses_profile_completeness():
    project = Project(id="p", tech_stack=["React", "Node.js"], experience_level="Intermediate")
    incomplete = UserProfile(id="u", skills=["React", "Node.js"], experience_level="Intermediate")
    complete = incomplete.model_copy(update={"bio": "hi", "location": "Lisbon"})
    assert score_profile_against_project(incomplete, project) == 90
    assert score_profile_against_project(complete, project) == 100
