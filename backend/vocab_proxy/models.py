"""Pydantic shapes for the subset of the upstream API this proxy consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FALLBACK_TEXT = "Something went wrong"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PathLevelMetadata(_WireModel):
    skill_id: Optional[str] = Field(default=None, alias="skillId")


class PathLevel(_WireModel):
    state: Optional[str] = None
    finished_sessions: Optional[int] = Field(default=None, alias="finishedSessions")
    path_level_metadata: Optional[PathLevelMetadata] = Field(default=None, alias="pathLevelMetadata")

    @property
    def skill_id(self) -> Optional[str]:
        if self.path_level_metadata is None:
            return None
        return self.path_level_metadata.skill_id or None


class PathUnit(_WireModel):
    levels: List[PathLevel] = Field(default_factory=list)


class PathSection(_WireModel):
    units: List[PathUnit] = Field(default_factory=list)


class CurrentCourse(_WireModel):
    learning_language: str = Field(alias="learningLanguage", min_length=1)
    from_language: str = Field(alias="fromLanguage", min_length=1)
    path_sectioned: List[PathSection] = Field(alias="pathSectioned")

    def iter_levels(self):
        for section in self.path_sectioned:
            for unit in section.units:
                yield from unit.levels


class ProfileDump(_WireModel):
    current_course: CurrentCourse = Field(alias="currentCourse")


@dataclass(frozen=True)
class CourseContext:
    target_language: str
    source_language: str


class SkillRef(_WireModel):
    id: str


class ProgressedSkill(_WireModel):
    skill_id: SkillRef = Field(alias="skillId")
    finished_levels: Literal[0, 1] = Field(alias="finishedLevels")
    finished_sessions: int = Field(alias="finishedSessions", ge=1)


class ProgressPayload(_WireModel):
    progressed_skills: List[ProgressedSkill] = Field(default_factory=list, alias="progressedSkills")
    last_total_lexeme_count: Optional[int] = Field(default=None, alias="lastTotalLexemeCount")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LearnedLexeme(_WireModel):
    """A learned word as returned upstream; unknown fields are kept verbatim."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    text: str
    translations: List[str] = Field(default_factory=list)
    is_new: bool = Field(default=False, alias="isNew")
    audio_url: str = Field(default="", alias="audioURL")

    @field_validator("audio_url", mode="before")
    @classmethod
    def _blank_audio(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class LexemeCountResponse(_WireModel):
    lexeme_count: int = Field(alias="lexemeCount", ge=0)


class Pagination(_WireModel):
    next_start_index: Optional[int] = Field(default=None, alias="nextStartIndex")


class LexemePageResponse(_WireModel):
    learned_lexemes: List[LearnedLexeme] = Field(alias="learnedLexemes")
    pagination: Optional[Pagination] = None

    @property
    def next_start_index(self) -> Optional[int]:
        if self.pagination is None:
            return None
        return self.pagination.next_start_index


def fallback_collection() -> List[LearnedLexeme]:
    return [LearnedLexeme(text=FALLBACK_TEXT, translations=[""], is_new=False, audio_url="")]


__all__ = [
    "CourseContext",
    "CurrentCourse",
    "FALLBACK_TEXT",
    "LearnedLexeme",
    "LexemeCountResponse",
    "LexemePageResponse",
    "Pagination",
    "PathLevel",
    "PathLevelMetadata",
    "PathSection",
    "PathUnit",
    "ProfileDump",
    "ProgressPayload",
    "ProgressedSkill",
    "SkillRef",
    "fallback_collection",
]
