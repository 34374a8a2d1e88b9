from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ─────────────────────────────────────────────────────────────
# Store records
# ─────────────────────────────────────────────────────────────

class Identity(BaseModel):
    """
    Authenticated principal returned by the identity provider.
    """
    id: str
    email: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _opaque_id(cls, v: Any) -> Any:
        return str(v) if v is not None else v


class Participant(BaseModel):
    """
    One profile row per registered identity (user_id is unique in the store).
    """
    id: str
    user_id: str
    name: str
    university: str
    email: str
    graduation_year: int
    skills: List[str] = Field(default_factory=list)
    project_idea: Optional[str] = None
    ai_interests: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _opaque_ids(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    @field_validator("skills", mode="before")
    @classmethod
    def _skills_default(cls, v: Any) -> Any:
        # Rows written by older clients may carry NULL skills
        return [] if v is None else v

    @property
    def has_project_idea(self) -> bool:
        return bool(self.project_idea)


class ProfileFields(BaseModel):
    """
    Editable part of a Participant, as written by the profile editor.
    """
    name: str = ""
    university: str = ""
    email: str = ""
    graduation_year: int
    skills: List[str] = Field(default_factory=list)
    project_idea: str = ""
    ai_interests: List[str] = Field(default_factory=list)

    @classmethod
    def from_participant(cls, participant: Participant) -> "ProfileFields":
        return cls(
            name=participant.name or "",
            university=participant.university or "",
            email=participant.email or "",
            graduation_year=participant.graduation_year,
            skills=list(participant.skills or []),
            project_idea=participant.project_idea or "",
            ai_interests=list(participant.ai_interests or []),
        )

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump()


# ─────────────────────────────────────────────────────────────
# View snapshots
# ─────────────────────────────────────────────────────────────

class DirectoryStats(BaseModel):
    participants: int = 0
    universities: int = 0
    skills: int = 0
    project_ideas: int = 0


class ParticipantCard(BaseModel):
    """
    Read-only card shown in the directory grid.
    """
    id: str
    name: str
    university: str
    skills: List[str]
    project_idea: Optional[str] = None
    ai_interests: List[str] = Field(default_factory=list)
    contact_href: str


class Notice(BaseModel):
    kind: Literal["success", "error"]
    message: str
    # saved | sign_in_required | invalid | store_failure
    code: str = "saved"
