"""
Shared fixtures for the timetable tests.
"""
import shutil
import tempfile

import pytest

from timetabler.data.seed import SAMPLE_COURSES, SAMPLE_TEACHERS, SAMPLE_ROOMS, SAMPLE_TIMINGS
from timetabler.data.store import InMemoryStore
from timetabler.models.entities import Course, Teacher, Room, TimeSlotTemplate
from timetabler.scheduler import TimetableService


def make_course(course_id, name=None):
    return Course(id=course_id, name=name or f"Course {course_id}", code=course_id.upper())


def make_teacher(teacher_id, days, name=None):
    return Teacher(id=teacher_id, name=name or teacher_id, availability=set(days))


def make_room(room_id, name=None):
    return Room(id=room_id, name=name or room_id, capacity=30)


def make_slot(slot_id, start, end, days, kind='lecture'):
    return TimeSlotTemplate(id=slot_id, name=f"Slot {slot_id}", start_time=start,
                            end_time=end, kind=kind, days=list(days))


@pytest.fixture
def sample_store():
    """In-memory store holding the sample catalog."""
    return InMemoryStore(
        courses=SAMPLE_COURSES,
        teachers=SAMPLE_TEACHERS,
        rooms=SAMPLE_ROOMS,
        timings=SAMPLE_TIMINGS
    )


@pytest.fixture
def sample_service(sample_store):
    return TimetableService(sample_store)


@pytest.fixture
def empty_service():
    return TimetableService(InMemoryStore())


@pytest.fixture
def data_dir():
    """Create a temporary data directory."""
    temp_dir = tempfile.mkdtemp()

    yield temp_dir

    # Clean up
    shutil.rmtree(temp_dir)
