"""
Greedy timetable generation.
This module places each course into the first free (slot, teacher, room)
combination it finds, using an ordered pass and a fallback rescan.
"""
import logging
import time
import uuid
from typing import List, Optional

from ..models.entities import (
    Course, Teacher, Room, TimeSlotTemplate, SlotInstance, TimetableEntry,
    GenerationResult, PreconditionFailed, PreconditionKind
)
from .slots import expand_slots
from .tracker import AvailabilityTracker

# Configure logger
logger = logging.getLogger(__name__)


class GreedyAssigner:
    """
    Implements first-fit greedy timetable generation.

    For every course, in catalog order:
    1. Pass A walks the slot instances in template order, then day order,
       and takes the first slot with an available teacher and a free room
    2. Pass B, only if Pass A placed nothing, rescans every known slot key
       with the same tests

    Teachers and rooms are always picked first-fit in catalog order. A course
    neither pass can place is left unassigned; earlier placements are never
    revisited.
    """

    def __init__(self,
                 courses: List[Course],
                 teachers: List[Teacher],
                 rooms: List[Room],
                 time_slots: List[TimeSlotTemplate]):
        """
        Initialize the assigner with catalog snapshots.

        Args:
            courses: Courses in catalog order
            teachers: Teachers in catalog order
            rooms: Rooms in catalog order
            time_slots: Time slot templates in catalog order
        """
        self.courses = list(courses)
        self.teachers = list(teachers)
        self.rooms = list(rooms)
        self.time_slots = list(time_slots)

        self.instances: List[SlotInstance] = []
        self.tracker = AvailabilityTracker()
        self.entries: List[TimetableEntry] = []
        self.unassigned: List[str] = []

    def check_preconditions(self) -> Optional[PreconditionFailed]:
        """
        Validate the catalogs before anything is placed.

        Returns:
            PreconditionFailed describing the first problem, or None
        """
        if not self.courses:
            return PreconditionFailed(PreconditionKind.MISSING_COURSES)
        if not self.teachers:
            return PreconditionFailed(PreconditionKind.MISSING_TEACHERS)
        if not self.rooms:
            return PreconditionFailed(PreconditionKind.MISSING_ROOMS)
        if not self.time_slots:
            return PreconditionFailed(PreconditionKind.MISSING_TIMESLOTS)

        self.instances = expand_slots(self.time_slots)
        if not self.instances:
            return PreconditionFailed(PreconditionKind.NO_SCHEDULABLE_TIMESLOTS)

        return None

    def _free_teachers(self, instance: SlotInstance) -> List[Teacher]:
        return [t for t in self.teachers
                if t.is_available(instance.day) and self.tracker.is_teacher_free(t.id, instance.key)]

    def _free_rooms(self, instance: SlotInstance) -> List[Room]:
        return [r for r in self.rooms if self.tracker.is_room_free(r.id, instance.key)]

    def _try_place(self, course: Course, instance: SlotInstance) -> bool:
        """
        Place the course at the instance if a teacher and a room are free.

        Returns:
            True if the course was placed
        """
        if not self.tracker.is_slot_free(instance.key):
            return False

        teachers = self._free_teachers(instance)
        rooms = self._free_rooms(instance)
        if not teachers or not rooms:
            return False

        teacher, room = teachers[0], rooms[0]
        self.tracker.commit(teacher.id, room.id, instance.key)

        self.entries.append(TimetableEntry(
            id=uuid.uuid4().hex,
            course=course.name,
            teacher=teacher.name,
            room=room.name,
            day=instance.day,
            start_time=instance.start_time,
            end_time=instance.end_time,
            kind=instance.kind,
            duration=instance.duration
        ))
        logger.info(f"Scheduled {course.name} on {instance.day} {instance.start_time} "
                    f"with {teacher.name} in {room.name}")
        return True

    def _assign_course(self, course: Course) -> bool:
        # Pass A: template order, then day order
        for instance in self.instances:
            if self._try_place(course, instance):
                return True

        # Pass B: every registered slot key
        logger.debug(f"Ordered pass found no slot for {course.name}, rescanning")
        for instance in self.tracker.slots():
            if self._try_place(course, instance):
                return True

        return False

    def optimize(self) -> GenerationResult:
        """
        Run the greedy generation.

        Returns:
            GenerationResult with the placed entries, or a failed result if a
            precondition does not hold
        """
        start_time = time.time()
        logger.info("Starting greedy timetable generation")

        # Each run starts from an empty timetable
        self.instances = []
        self.tracker = AvailabilityTracker()
        self.entries = []
        self.unassigned = []

        failure = self.check_preconditions()
        if failure is not None:
            logger.warning(f"Generation aborted: {failure.kind.value}")
            return GenerationResult.failed(failure)

        for instance in self.instances:
            self.tracker.register(instance)

        for course in self.courses:
            if not self._assign_course(course):
                self.unassigned.append(course.name)
                logger.warning(f"Could not schedule course {course.name}")

        placed = len(self.entries)
        total = len(self.courses)
        elapsed = time.time() - start_time

        logger.info(f"Scheduled {placed}/{total} courses into "
                    f"{self.tracker.occupied_count}/{len(self.tracker.slots())} slots")
        logger.info(f"Greedy generation completed in {elapsed:.2f} seconds")

        return GenerationResult(
            success=True,
            entries=list(self.entries),
            message=f"Assigned {placed} of {total} courses with no time conflicts.",
            unassigned=list(self.unassigned),
            metrics={'generation_time': elapsed}
        )
