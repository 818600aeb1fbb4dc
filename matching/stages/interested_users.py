"""
Owner-facing ranking of the developers interested in a project.

The scorer runs in the reverse direction of browse: each interested user is the
viewer and the fixed project is the target. The score drives the sort; the
matching-skills list rides alongside for display only. Only the project owner
may see this list.
"""

import logging
from typing import List, Optional

from ..models.config import MatchingConfig, resolve_config
from ..models.interest import Interest
from ..models.profile import ensure_profile
from ..models.project import Project
from ..models.scoring import InterestedUser
from ..results import Ok, Result, forbidden, storage_unavailable, unauthorized
from ..sources import InterestSource, UserSource
from .match_score import matching_skills, score_profile_against_project

logger = logging.getLogger(__name__)


def rank_interested_users(
    project: Project,
    requester_id: Optional[str],
    interests: InterestSource,
    users: UserSource,
    config: Optional[MatchingConfig] = None,
) -> Result:
    """
    Return Ok(List[InterestedUser]) sorted by score descending.

    Err(unauthorized) without a requester, Err(forbidden) unless the requester owns
    the project. Ties keep the most recent interest first.
    """
    config = resolve_config(config)
    if not requester_id:
        return unauthorized()
    if not project.is_owned_by(requester_id):
        return forbidden("Only project owner can view interested users")

    try:
        interest_docs = interests.find_interests_by_project(project.id)
        records = [Interest.model_validate(d) for d in interest_docs]
        user_docs = users.get_many([r.user_id for r in records])
        profiles = {user_id: ensure_profile(doc) for user_id, doc in user_docs.items()}
    except Exception:
        logger.exception("rank_interested_users: storage failure (project=%s)", project.id)
        return storage_unavailable("Failed to fetch interested users")

    ranked: List[InterestedUser] = []
    for record in records:
        user = profiles.get(record.user_id)
        if user is None:
            # Interest outlived its user
            continue
        score = score_profile_against_project(user, project, config)
        ranked.append(
            InterestedUser(
                user=user,
                score=score,
                matching_skills=matching_skills(project.tech_stack, user.skills),
                interested_at=record.created_at,
            )
        )

    ranked.sort(key=lambda u: u.interested_at or "", reverse=True)
    ranked.sort(key=lambda u: u.score, reverse=True)
    return Ok(ranked)
