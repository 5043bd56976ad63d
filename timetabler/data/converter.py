"""
Data converter module.

Handles conversions between different data formats:
- DataFrame rows to domain objects
- Domain objects to DataFrame rows
- Timetable entries to a day by time grid
"""
import pandas as pd
from typing import Dict, List, Any, Iterable
import logging

from ..models.entities import (
    Course, Teacher, Room, TimeSlotTemplate, TimetableEntry, WEEK_DAYS
)

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ';'


def _split(value: Any) -> List[str]:
    """Split a ';'-separated cell into its stripped, non-empty parts."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return []
    return [part.strip() for part in str(value).split(LIST_SEPARATOR) if part.strip()]


def _join(values: Iterable[str]) -> str:
    return LIST_SEPARATOR.join(values)


def _text(row: pd.Series, column: str, default: str = "") -> str:
    value = row.get(column, default)
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return default
    return str(value)


def _integer(row: pd.Series, column: str, default: int = 0) -> int:
    value = _text(row, column)
    if not value:
        return default
    try:
        return int(float(value))
    except ValueError:
        raise ValueError(f"Invalid integer for {column}: {value!r}")


def _ordered_days(days: Iterable[str]) -> List[str]:
    """Sort a set of day names Monday first; unknown names go last."""
    return sorted(days, key=lambda d: WEEK_DAYS.index(d) if d in WEEK_DAYS else len(WEEK_DAYS))


class DataConverter:
    """
    Converts between different data representations used in the system.

    Responsibilities:
    - Convert CSV/DataFrame rows to catalog and timetable objects
    - Convert those objects back to DataFrames for storage and export
    - Build the day by time grid view of a timetable
    """

    # Column layout of each stored collection
    COLUMNS = {
        'courses': ['id', 'name', 'code', 'credits', 'department', 'description'],
        'teachers': ['id', 'name', 'department', 'subjects', 'availability', 'email', 'phone'],
        'rooms': ['id', 'name', 'capacity', 'type', 'equipment', 'building'],
        'timings': ['id', 'name', 'start_time', 'end_time', 'duration', 'kind', 'days'],
        'timetable': ['id', 'course', 'teacher', 'room', 'day', 'start_time', 'end_time', 'kind', 'duration'],
    }

    @staticmethod
    def convert_courses(courses_df: pd.DataFrame) -> List[Course]:
        """
        Convert courses DataFrame to Course objects.

        Args:
            courses_df: DataFrame containing course data

        Returns:
            List of Course objects in row order
        """
        courses = []

        for _, row in courses_df.iterrows():
            courses.append(Course(
                id=_text(row, 'id'),
                name=_text(row, 'name'),
                code=_text(row, 'code'),
                credits=_integer(row, 'credits'),
                department=_text(row, 'department'),
                description=_text(row, 'description')
            ))

        return courses

    @staticmethod
    def convert_teachers(teachers_df: pd.DataFrame) -> List[Teacher]:
        """
        Convert teachers DataFrame to Teacher objects.

        Args:
            teachers_df: DataFrame containing teacher data; subjects and
                availability are ';'-separated

        Returns:
            List of Teacher objects in row order
        """
        teachers = []

        for _, row in teachers_df.iterrows():
            availability = set(_split(row.get('availability')))
            unknown = availability - set(WEEK_DAYS)
            if unknown:
                logger.warning(f"Teacher {_text(row, 'name')} has unknown availability days: {unknown}")

            teachers.append(Teacher(
                id=_text(row, 'id'),
                name=_text(row, 'name'),
                department=_text(row, 'department'),
                subjects=set(_split(row.get('subjects'))),
                availability=availability,
                email=_text(row, 'email'),
                phone=_text(row, 'phone')
            ))

        return teachers

    @staticmethod
    def convert_rooms(rooms_df: pd.DataFrame) -> List[Room]:
        """Convert rooms DataFrame to Room objects."""
        rooms = []

        for _, row in rooms_df.iterrows():
            rooms.append(Room(
                id=_text(row, 'id'),
                name=_text(row, 'name'),
                capacity=_integer(row, 'capacity'),
                type=_text(row, 'type'),
                equipment=set(_split(row.get('equipment'))),
                building=_text(row, 'building')
            ))

        return rooms

    @staticmethod
    def convert_time_slots(timings_df: pd.DataFrame) -> List[TimeSlotTemplate]:
        """
        Convert timings DataFrame to TimeSlotTemplate objects.

        Args:
            timings_df: DataFrame containing time slot data; days are
                ';'-separated in the order they should be scheduled

        Returns:
            List of TimeSlotTemplate objects in row order
        """
        time_slots = []

        for _, row in timings_df.iterrows():
            duration = _text(row, 'duration')
            time_slots.append(TimeSlotTemplate(
                id=_text(row, 'id'),
                name=_text(row, 'name'),
                start_time=_text(row, 'start_time'),
                end_time=_text(row, 'end_time'),
                kind=_text(row, 'kind', 'lecture'),
                days=_split(row.get('days')),
                duration=_integer(row, 'duration') if duration else None
            ))

        return time_slots

    @staticmethod
    def convert_entries(timetable_df: pd.DataFrame) -> List[TimetableEntry]:
        """Convert timetable DataFrame to TimetableEntry objects."""
        entries = []

        for _, row in timetable_df.iterrows():
            entries.append(TimetableEntry(
                id=_text(row, 'id'),
                course=_text(row, 'course'),
                teacher=_text(row, 'teacher'),
                room=_text(row, 'room'),
                day=_text(row, 'day'),
                start_time=_text(row, 'start_time'),
                end_time=_text(row, 'end_time'),
                kind=_text(row, 'kind', 'lecture'),
                duration=_integer(row, 'duration')
            ))

        return entries

    @classmethod
    def to_records(cls, collection: str, records: List[Any]) -> pd.DataFrame:
        """
        Convert domain objects back to a DataFrame for storage.

        Sets are written sorted (days Monday first) so files are stable.
        """
        rows = []

        for record in records:
            row: Dict[str, Any] = {}
            for column in cls.COLUMNS[collection]:
                value = getattr(record, column)
                if isinstance(value, set):
                    value = _join(_ordered_days(value) if column == 'availability' else sorted(value))
                elif isinstance(value, list):
                    value = _join(value)
                row[column] = value
            rows.append(row)

        return pd.DataFrame(rows, columns=cls.COLUMNS[collection])

    @classmethod
    def from_records(cls, collection: str, df: pd.DataFrame) -> List[Any]:
        converters = {
            'courses': cls.convert_courses,
            'teachers': cls.convert_teachers,
            'rooms': cls.convert_rooms,
            'timings': cls.convert_time_slots,
            'timetable': cls.convert_entries,
        }
        return converters[collection](df)

    @staticmethod
    def convert_to_timetable_grid(entries: List[TimetableEntry]) -> pd.DataFrame:
        """
        Convert timetable entries to a grid of start times by weekday.

        Args:
            entries: Timetable entries

        Returns:
            DataFrame indexed by start time with one column per scheduled day;
            each cell reads "Course (Teacher, Room)", several entries in the
            same cell are joined with "; "
        """
        if not entries:
            return pd.DataFrame()

        df = pd.DataFrame([{
            'day': e.day,
            'start_time': e.start_time,
            'label': f"{e.course} ({e.teacher}, {e.room})"
        } for e in entries])

        grid = df.groupby(['start_time', 'day'])['label'].agg('; '.join).unstack('day')

        days = _ordered_days(grid.columns)
        return grid.reindex(columns=days).fillna('').sort_index()
