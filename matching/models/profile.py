"""
User profile model: the developer side of a match.

Built from store dicts via UserProfile.model_validate(d) or ensure_profiles().
Completeness comes in two flavours: the 3-of-4 flag the scorer uses, and the
weighted percentage shown on the dashboard.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

EXPERIENCE_LEVELS = ["Beginner", "Intermediate", "Advanced"]

# (field, weight) for the dashboard completion percentage
COMPLETION_WEIGHTS = [
    ("name", 15),
    ("bio", 20),
    ("skills", 25),
    ("experience_level", 15),
    ("location", 10),
    ("github_url", 10),
    ("image", 5),
]
COMPLETION_THRESHOLD = 80


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set)):
        return len(value) > 0
    return bool(value)


class UserProfile(BaseModel):
    """
    A developer profile.

    All fields except id are optional to support partial documents from the store.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = ""
    email: Optional[str] = ""
    image: Optional[str] = None
    bio: Optional[str] = ""
    location: Optional[str] = ""
    skills: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = "Beginner"
    github_url: Optional[str] = ""
    linkedin_url: Optional[str] = ""
    leetcode_url: Optional[str] = ""
    codechef_url: Optional[str] = ""
    codeforces_url: Optional[str] = ""
    created_at: Optional[str] = ""

    def filled_profile_fields(self) -> int:
        """Count of {bio, skills, experience_level, location} that are populated."""
        return sum(
            1
            for value in (self.bio, self.skills, self.experience_level, self.location)
            if _filled(value)
        )

    def is_complete(self, min_fields: int = 3) -> bool:
        return self.filled_profile_fields() >= min_fields

    def public_dict(self) -> Dict[str, Any]:
        """Profile without contact details (email)."""
        return self.model_dump(exclude={"email"})


class ProfileCompletion(BaseModel):
    percentage: int
    missing_fields: List[str]
    is_complete: bool


def profile_completion(user: UserProfile) -> ProfileCompletion:
    """Weighted completion percentage for the dashboard progress bar."""
    total = sum(weight for _, weight in COMPLETION_WEIGHTS)
    filled = 0
    missing: List[str] = []
    for field, weight in COMPLETION_WEIGHTS:
        if _filled(getattr(user, field, None)):
            filled += weight
        else:
            missing.append(field)
    percentage = int(filled * 100 / total + 0.5)
    return ProfileCompletion(
        percentage=percentage,
        missing_fields=missing,
        is_complete=percentage >= COMPLETION_THRESHOLD,
    )


def ensure_profile(user: Union[Dict[str, Any], "UserProfile"]) -> "UserProfile":
    return UserProfile.model_validate(user) if isinstance(user, dict) else user


def ensure_profiles(users: List[Union[Dict[str, Any], "UserProfile"]]) -> List["UserProfile"]:
    """Convert list of dicts or UserProfiles to list of UserProfile models."""
    return [ensure_profile(u) for u in users]
