"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "DevMatch API",
        "version": "1.0.0",
        "data_source": state.config.data_source,
        "endpoints": {
            "users": ["/api/users/enter", "/api/users/me", "/api/users/me/completion", "/api/users/{id}"],
            "projects": ["/api/projects", "/api/projects/recommended", "/api/projects/mine", "/api/projects/{id}"],
            "interests": ["/api/projects/{id}/interest", "/api/interests/mine"],
            "notifications": ["/api/notifications", "/api/notifications/unread-count"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    weights = state.matching_config
    return {
        "status": "healthy",
        "data_source": state.config.data_source,
        "stores": {
            name: type(store).__name__
            for name, store in (
                ("users", state.repos.users),
                ("projects", state.repos.projects),
                ("interests", state.repos.interests),
                ("notifications", state.repos.notifications),
            )
        },
        "scoring_weights": {
            "skills": weights.weight_skills,
            "experience": weights.weight_experience,
            "completeness": weights.weight_completeness,
        },
    }
