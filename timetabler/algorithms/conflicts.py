"""
Conflict rules for manually inserted timetable entries.
"""
import logging
from typing import Iterable, Optional

from ..models.entities import (
    EntryCandidate, TimetableEntry, Teacher,
    ScheduleConflict, TeacherUnavailable
)

logger = logging.getLogger(__name__)


def find_conflict(candidate: EntryCandidate,
                  entries: Iterable[TimetableEntry]) -> Optional[ScheduleConflict]:
    """
    Find an existing entry that double-books the candidate's teacher or room.

    Args:
        candidate: Requested entry
        entries: Current timetable entries

    Returns:
        ScheduleConflict for the first colliding entry, or None
    """
    for existing in entries:
        if existing.day != candidate.day or existing.start_time != candidate.start_time:
            continue

        if existing.teacher == candidate.teacher:
            resource = existing.teacher
        elif existing.room == candidate.room:
            resource = existing.room
        else:
            continue

        return ScheduleConflict(
            resource=resource,
            day=candidate.day,
            start_time=candidate.start_time,
            existing=existing
        )

    return None


def find_teacher(name_or_id: str, teachers: Iterable[Teacher]) -> Optional[Teacher]:
    """Look a teacher up by display name, then by id."""
    teachers = list(teachers)
    for teacher in teachers:
        if teacher.name == name_or_id:
            return teacher
    for teacher in teachers:
        if teacher.id == name_or_id:
            return teacher
    return None


def check_availability(candidate: EntryCandidate,
                       teachers: Iterable[Teacher]) -> Optional[TeacherUnavailable]:
    """
    Check the candidate's teacher works on the requested day.

    Teachers missing from the catalog are accepted.
    """
    teacher = find_teacher(candidate.teacher, teachers)
    if teacher is None:
        logger.debug(f"Teacher {candidate.teacher} not in catalog, skipping availability check")
        return None

    if not teacher.is_available(candidate.day):
        return TeacherUnavailable(teacher=candidate.teacher, day=candidate.day)

    return None
