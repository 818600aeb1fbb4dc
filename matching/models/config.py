"""
Matching configuration: scorer weights, sub-score tables, and recommendation limits.

MatchingConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file named by MATCHING_CONFIG_PATH); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class MatchingConfig(BaseModel):
    """Configuration for match scoring and ranked retrieval."""

    # -------------------------------------------------------------------------
    # Weighted Scoring (must sum to 1.0)
    # score = weight_skills * skill_pct + weight_experience * exp_pct + weight_completeness * compl_pct
    # -------------------------------------------------------------------------

    # Share of the target's tech stack the viewer already covers.
    weight_skills: float = 0.6
    # Proximity of viewer and target experience levels.
    weight_experience: float = 0.2
    # Bonus for a complete viewer profile.
    weight_completeness: float = 0.2

    # -------------------------------------------------------------------------
    # Experience Proximity (percent by level distance)
    # -------------------------------------------------------------------------

    experience_exact: int = 100
    experience_one_off: int = 50
    experience_far: int = 25

    # -------------------------------------------------------------------------
    # Profile Completeness
    # complete when at least completeness_min_fields of {bio, skills, experience, location} are filled
    # -------------------------------------------------------------------------

    completeness_complete: int = 100
    completeness_incomplete: int = 50
    completeness_min_fields: int = 3

    # -------------------------------------------------------------------------
    # Dashboard Recommendations
    # -------------------------------------------------------------------------

    # Projects scoring below this are never recommended.
    recommendation_floor: int = 40
    # Default number of recommendations returned.
    recommendation_limit: int = 5

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        total = self.weight_skills + self.weight_experience + self.weight_completeness
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "MatchingConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "weights" in config_dict:
            w = config_dict["weights"]
            if "skills" in w:
                flat["weight_skills"] = w["skills"]
            if "experience" in w:
                flat["weight_experience"] = w["experience"]
            if "completeness" in w:
                flat["weight_completeness"] = w["completeness"]
        if "experience" in config_dict:
            ex = config_dict["experience"]
            for key in ("exact", "one_off", "far"):
                if key in ex:
                    flat[f"experience_{key}"] = ex[key]
        if "completeness" in config_dict:
            co = config_dict["completeness"]
            if "complete" in co:
                flat["completeness_complete"] = co["complete"]
            if "incomplete" in co:
                flat["completeness_incomplete"] = co["incomplete"]
            if "min_fields" in co:
                flat["completeness_min_fields"] = co["min_fields"]
        if "recommendations" in config_dict:
            rec = config_dict["recommendations"]
            if "floor" in rec:
                flat["recommendation_floor"] = rec["floor"]
            if "limit" in rec:
                flat["recommendation_limit"] = rec["limit"]
        # Flat keys are accepted as-is
        flat.update({k: v for k, v in config_dict.items() if k in cls.model_fields})
        return cls.model_validate(flat)


DEFAULT_CONFIG = MatchingConfig()


def resolve_config(config: Optional["MatchingConfig"]) -> "MatchingConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
