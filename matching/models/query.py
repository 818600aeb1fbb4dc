"""
ProjectQuery: the storage filter built by the retrievers.

Stores translate what their backend can express natively and fall back to
matches() for the rest, so the JSON and Firestore stores agree on semantics.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# Fields searched by keywords (OR across fields)
KEYWORD_FIELDS = ("title", "description", "short_description")


class ProjectQuery(BaseModel):
    """Filter over the projects collection. Unset fields do not constrain."""

    keywords: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    owner_id: Optional[str] = None
    exclude_owner_id: Optional[str] = None

    @property
    def keyword_text(self) -> str:
        return (self.keywords or "").strip()

    def matches_keywords(self, doc: Dict[str, Any]) -> bool:
        """Case-insensitive substring match on text fields or any tech stack entry."""
        needle = self.keyword_text.lower()
        if not needle:
            return True
        for field in KEYWORD_FIELDS:
            if needle in (doc.get(field) or "").lower():
                return True
        return any(needle in (tech or "").lower() for tech in doc.get("tech_stack") or [])

    def matches(self, doc: Dict[str, Any]) -> bool:
        """True if a project document satisfies every supplied constraint."""
        if not self.matches_keywords(doc):
            return False
        if self.tech_stack:
            if not set(self.tech_stack) & set(doc.get("tech_stack") or []):
                return False
        if self.experience_level and doc.get("experience_level") != self.experience_level:
            return False
        if self.category and doc.get("category") != self.category:
            return False
        if self.status and doc.get("status") != self.status:
            return False
        if self.owner_id and doc.get("owner_id") != self.owner_id:
            return False
        if self.exclude_owner_id and doc.get("owner_id") == self.exclude_owner_id:
            return False
        return True
