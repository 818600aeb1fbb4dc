"""
Match Scorer: 0–100 compatibility between a developer and a project.

Weighted linear combination of three independent sub-scores:
- skill coverage: share of the target's tech stack the viewer already has
  (asymmetric; extra viewer skills neither help nor hurt)
- experience proximity: 100 / 50 / 25 by level distance 0 / 1 / >=2
- completeness: 100 for a complete viewer profile, else 50

Unknown experience strings (including a project's "Any") map to Beginner so the
function is total over every string input. Rounding is half-up on the exact
decimal value, so x.5 always rounds away from zero.

No side effects and no I/O; the public entry point is compute_match_score.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from ..models.config import DEFAULT_CONFIG, MatchingConfig
from ..models.profile import EXPERIENCE_LEVELS, UserProfile
from ..models.project import Project


def experience_index(level: Optional[str]) -> int:
    """Position of level in EXPERIENCE_LEVELS; unknown or missing levels count as Beginner (0)."""
    try:
        return EXPERIENCE_LEVELS.index(level)
    except ValueError:
        return 0


def matching_skills(target_tech_stack: Iterable[str], viewer_skills: Iterable[str]) -> List[str]:
    """Target tech the viewer covers, in the target's order, without duplicates."""
    have = set(viewer_skills)
    out: List[str] = []
    for tech in target_tech_stack:
        if tech in have and tech not in out:
            out.append(tech)
    return out


def skill_coverage(viewer_skills: Iterable[str], target_tech_stack: Iterable[str]) -> Decimal:
    """Percent of the target's distinct tech covered by the viewer. Empty target -> 0."""
    target = set(target_tech_stack)
    if not target:
        return Decimal(0)
    matched = len(target & set(viewer_skills))
    return Decimal(matched) * 100 / Decimal(len(target))


def experience_proximity(
    viewer_experience: Optional[str],
    target_experience: Optional[str],
    config: MatchingConfig = DEFAULT_CONFIG,
) -> int:
    delta = abs(experience_index(viewer_experience) - experience_index(target_experience))
    if delta == 0:
        return config.experience_exact
    if delta == 1:
        return config.experience_one_off
    return config.experience_far


def compute_match_score(
    viewer_skills: Iterable[str],
    viewer_experience: Optional[str],
    viewer_profile_complete: bool,
    target_tech_stack: Iterable[str],
    target_experience: Optional[str],
    config: MatchingConfig = DEFAULT_CONFIG,
) -> int:
    """
    Score how well a viewer fits a target (integer in [0, 100]).

    score = round_half_up(skill_pct * w_skills + exp_pct * w_experience + compl_pct * w_completeness)
    """
    skill_pct = skill_coverage(viewer_skills, target_tech_stack)
    exp_pct = Decimal(experience_proximity(viewer_experience, target_experience, config))
    compl_pct = Decimal(
        config.completeness_complete if viewer_profile_complete else config.completeness_incomplete
    )
    raw = (
        skill_pct * Decimal(str(config.weight_skills))
        + exp_pct * Decimal(str(config.weight_experience))
        + compl_pct * Decimal(str(config.weight_completeness))
    )
    score = int(raw.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return max(0, min(100, score))


def score_profile_against_project(
    user: UserProfile,
    project: Project,
    config: MatchingConfig = DEFAULT_CONFIG,
) -> int:
    """Score with the user as viewer and the project as target (both directions use this)."""
    return compute_match_score(
        user.skills,
        user.experience_level,
        user.is_complete(config.completeness_min_fields),
        project.tech_stack,
        project.experience_level,
        config,
    )
