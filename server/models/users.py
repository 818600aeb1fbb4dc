"""User and profile Pydantic models."""

from typing import List, Optional, Union

from pydantic import BaseModel


class UserEnterRequest(BaseModel):
    name: str
    email: str


class ProfileResponse(BaseModel):
    id: str
    name: Optional[str] = ""
    email: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = ""
    location: Optional[str] = ""
    skills: List[str] = []
    experience_level: Optional[str] = "Beginner"
    github_url: Optional[str] = ""
    linkedin_url: Optional[str] = ""
    leetcode_url: Optional[str] = ""
    codechef_url: Optional[str] = ""
    codeforces_url: Optional[str] = ""
    created_at: Optional[str] = None


class UserEnterResponse(BaseModel):
    user: ProfileResponse
    created: bool = False


class UpdateProfileRequest(BaseModel):
    name: str
    bio: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    # list, or a comma-separated string from a plain text input
    skills: Optional[Union[List[str], str]] = None
    experience_level: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    leetcode_url: Optional[str] = None
    codechef_url: Optional[str] = None
    codeforces_url: Optional[str] = None


class CompletionResponse(BaseModel):
    percentage: int
    missing_fields: List[str] = []
    is_complete: bool = False
