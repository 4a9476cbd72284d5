"""Reduce a profile dump into the skill-progress payload the lexeme endpoints expect."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from pydantic import ValidationError

from .errors import MalformedProfileError
from .models import ProfileDump, ProgressedSkill, ProgressPayload, SkillRef


@dataclass
class _SkillProgress:
    finished_sessions: int
    passed: bool


def parse_profile(data: Mapping[str, Any]) -> ProfileDump:
    try:
        return ProfileDump.model_validate(data)
    except ValidationError as exc:
        raise MalformedProfileError(f"profile is missing course fields: {exc}") from exc


def build_payload(profile_dump: Mapping[str, Any]) -> Tuple[ProgressPayload, str, str]:
    """Return ``(payload, target_language, source_language)`` for a profile dump.

    Levels without a skill id, or with fewer than one finished session, are
    dropped. When a skill appears more than once, the level with the strictly
    higher session count wins and brings its ``passed`` state along; ties keep
    the first one seen. Skills are emitted in first-seen order.
    """
    course = parse_profile(profile_dump).current_course

    skills: Dict[str, _SkillProgress] = {}
    for level in course.iter_levels():
        skill_id = level.skill_id
        if not skill_id:
            continue
        finished_sessions = level.finished_sessions or 0
        if finished_sessions < 1:
            continue
        passed = level.state == "passed"

        current = skills.get(skill_id)
        if current is None:
            skills[skill_id] = _SkillProgress(finished_sessions=finished_sessions, passed=passed)
        elif finished_sessions > current.finished_sessions:
            current.finished_sessions = finished_sessions
            current.passed = passed

    payload = ProgressPayload(
        progressed_skills=[
            ProgressedSkill(
                skill_id=SkillRef(id=skill_id),
                finished_levels=1 if progress.passed else 0,
                finished_sessions=progress.finished_sessions,
            )
            for skill_id, progress in skills.items()
        ]
    )
    return payload, course.learning_language, course.from_language


__all__ = ["build_payload", "parse_profile"]
