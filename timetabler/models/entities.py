"""
Entity models for the timetable manager.
These classes represent the catalog records, the derived slot instances and
the timetable entries produced by generation or manual insertion.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Dict, Optional, Set, Tuple, Any, Union


WEEK_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Template kinds the generator may place courses into
SCHEDULABLE_KINDS = ("lecture", "lab")
SLOT_KINDS = ("lecture", "lab", "break", "lunch")

SlotKey = Tuple[str, str]  # (day, start_time)


def minutes_between(start_time: str, end_time: str) -> int:
    """Number of minutes between two HH:MM times on the same day."""
    start_h, start_m = (int(part) for part in start_time.split(":")[:2])
    end_h, end_m = (int(part) for part in end_time.split(":")[:2])
    return (end_h * 60 + end_m) - (start_h * 60 + start_m)


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for {field_name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid integer for {field_name}: {value!r}") from None


def _as_set(value: Any, field_name: str) -> Set[str]:
    """None means empty; strings are rejected rather than split into characters."""
    if value is None:
        return set()
    if isinstance(value, (str, bytes)) or not isinstance(value, (set, frozenset, list, tuple)):
        raise ValueError(f"{field_name} must be a list, got {type(value).__name__}")
    return {str(v) for v in value}


@dataclass
class Course:
    """Represents a course offered in the curriculum."""
    id: str
    name: str
    code: str = ""
    credits: int = 0
    department: str = ""
    description: str = ""

    def __post_init__(self):
        self.credits = _as_int(self.credits, 'credits')


@dataclass
class Teacher:
    """Represents a teacher with the days they can be scheduled."""
    id: str
    name: str
    department: str = ""
    subjects: Set[str] = field(default_factory=set)
    availability: Set[str] = field(default_factory=set)
    email: str = ""
    phone: str = ""

    def __post_init__(self):
        self.subjects = _as_set(self.subjects, 'subjects')
        self.availability = _as_set(self.availability, 'availability')

    def is_available(self, day: str) -> bool:
        """Check if teacher can be scheduled on the given day."""
        return day in self.availability


@dataclass
class Room:
    """Represents a room. Capacity and equipment are informational."""
    id: str
    name: str
    capacity: int = 0
    type: str = ""
    equipment: Set[str] = field(default_factory=set)
    building: str = ""

    def __post_init__(self):
        self.capacity = _as_int(self.capacity, 'capacity')
        self.equipment = _as_set(self.equipment, 'equipment')


@dataclass
class TimeSlotTemplate:
    """Represents a recurring period in the weekly schedule."""
    id: str
    name: str
    start_time: str
    end_time: str
    kind: str = "lecture"
    days: List[str] = field(default_factory=list)
    duration: Optional[int] = None

    def __post_init__(self):
        if self.kind not in SLOT_KINDS:
            raise ValueError(f"Invalid slot kind for {self.name}: {self.kind}")
        if self.days is None:
            self.days = []
        if not isinstance(self.days, (list, tuple)):
            raise ValueError(f"days must be a list, got {type(self.days).__name__}")
        self.days = list(self.days)
        unknown = [d for d in self.days if d not in WEEK_DAYS]
        if unknown:
            raise ValueError(f"Unknown days for {self.name}: {', '.join(map(str, unknown))}")
        if self.duration is None:
            self.duration = minutes_between(self.start_time, self.end_time)
        else:
            self.duration = _as_int(self.duration, 'duration')

    @property
    def is_schedulable(self) -> bool:
        return self.kind in SCHEDULABLE_KINDS

    def __str__(self) -> str:
        return f"{self.name}: {', '.join(self.days)} {self.start_time} - {self.end_time} ({self.kind})"


@dataclass
class SlotInstance:
    """One occurrence of a schedulable template on a specific day."""
    day: str
    start_time: str
    end_time: str
    kind: str
    duration: int

    @property
    def key(self) -> SlotKey:
        return (self.day, self.start_time)


@dataclass
class TimetableEntry:
    """
    A placed (course, teacher, room) at a (day, start time).

    Course, teacher and room hold display names, as the persisted
    timetable records always have.
    """
    id: str
    course: str
    teacher: str
    room: str
    day: str
    start_time: str
    end_time: str
    kind: str = "lecture"
    duration: int = 0

    @property
    def key(self) -> SlotKey:
        return (self.day, self.start_time)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EntryCandidate:
    """A requested manual timetable entry, before an id is assigned."""
    course: str
    teacher: str
    room: str
    day: str
    start_time: str
    end_time: str = ""
    kind: str = "lecture"
    duration: Optional[int] = None

    def __post_init__(self):
        if self.day not in WEEK_DAYS:
            raise ValueError(f"Unknown day: {self.day}")
        if self.duration is None:
            self.duration = minutes_between(self.start_time, self.end_time) if self.end_time else 0

    def to_entry(self, entry_id: str) -> TimetableEntry:
        return TimetableEntry(
            id=entry_id,
            course=self.course,
            teacher=self.teacher,
            room=self.room,
            day=self.day,
            start_time=self.start_time,
            end_time=self.end_time,
            kind=self.kind,
            duration=self.duration
        )


class PreconditionKind(str, Enum):
    """Reasons a generation run refuses to start."""
    MISSING_COURSES = "missing-courses"
    MISSING_TEACHERS = "missing-teachers"
    MISSING_ROOMS = "missing-rooms"
    MISSING_TIMESLOTS = "missing-timeslots"
    NO_SCHEDULABLE_TIMESLOTS = "no-schedulable-timeslots"


PRECONDITION_MESSAGES = {
    PreconditionKind.MISSING_COURSES: "Need at least one course to generate timetable",
    PreconditionKind.MISSING_TEACHERS: "Need at least one teacher to generate timetable",
    PreconditionKind.MISSING_ROOMS: "Need at least one room to generate timetable",
    PreconditionKind.MISSING_TIMESLOTS: "Please add time slots before generating timetable",
    PreconditionKind.NO_SCHEDULABLE_TIMESLOTS: "No lecture or lab time slots found",
}


@dataclass
class PreconditionFailed:
    """Structured failure returned when generation cannot start."""
    kind: PreconditionKind

    @property
    def message(self) -> str:
        return PRECONDITION_MESSAGES[self.kind]


@dataclass
class GenerationResult:
    """Outcome of one generation run."""
    success: bool
    entries: List[TimetableEntry] = field(default_factory=list)
    message: str = ""
    reason: Optional[PreconditionKind] = None
    unassigned: List[str] = field(default_factory=list)
    metrics: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def failed(cls, failure: PreconditionFailed) -> "GenerationResult":
        return cls(success=False, message=failure.message, reason=failure.kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'entries': [e.to_dict() for e in self.entries],
            'message': self.message,
            'reason': self.reason.value if self.reason else None,
            'unassigned': list(self.unassigned),
            'metrics': dict(self.metrics)
        }


@dataclass
class EntryAdded:
    """Manual insertion succeeded."""
    entry: TimetableEntry

    @property
    def message(self) -> str:
        return f"Added {self.entry.course} on {self.entry.day} at {self.entry.start_time}"


@dataclass
class ScheduleConflict:
    """Manual insertion collided with an existing entry."""
    resource: str
    day: str
    start_time: str
    existing: TimetableEntry

    @property
    def message(self) -> str:
        return f"Conflict detected: {self.resource} is already scheduled at {self.start_time} on {self.day}"


@dataclass
class TeacherUnavailable:
    """Manual insertion named a teacher who does not work that day."""
    teacher: str
    day: str

    @property
    def message(self) -> str:
        return f"{self.teacher} is not available on {self.day}"


ManualEntryResult = Union[EntryAdded, ScheduleConflict, TeacherUnavailable]


@dataclass
class SlotAvailability:
    """A free slot instance with the teachers and rooms that could take it."""
    day: str
    start_time: str
    end_time: str
    duration: int
    kind: str
    available_teachers: List[str] = field(default_factory=list)
    available_rooms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
