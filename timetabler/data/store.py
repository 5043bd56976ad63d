"""
Store interface for catalogs and the timetable.

The generation engine only reads catalog snapshots and replaces the whole
timetable; everything else here is CRUD used by the CLI and the API.
"""
import dataclasses
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Any

from ..models.entities import Course, Teacher, Room, TimeSlotTemplate, TimetableEntry

logger = logging.getLogger(__name__)

# Collection name -> record type
COLLECTIONS = {
    'courses': Course,
    'teachers': Teacher,
    'rooms': Room,
    'timings': TimeSlotTemplate,
    'timetable': TimetableEntry,
}


class RecordNotFound(LookupError):
    """Raised when a record id is not present in a collection."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection} record {record_id} not found")
        self.collection = collection
        self.record_id = record_id


def new_id() -> str:
    return uuid.uuid4().hex


class TimetableStore(ABC):
    """
    Base class for record storage.

    Subclasses provide whole-collection reads and writes; snapshots
    returned by the list methods are copies the caller may keep.
    """

    @abstractmethod
    def _read(self, collection: str) -> List[Any]:
        """Return every record of a collection, in stored order."""

    @abstractmethod
    def _write(self, collection: str, records: List[Any]) -> None:
        """Replace every record of a collection."""

    def _check_collection(self, collection: str) -> None:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection}")

    def list_courses(self) -> List[Course]:
        return self._read('courses')

    def list_teachers(self) -> List[Teacher]:
        return self._read('teachers')

    def list_rooms(self) -> List[Room]:
        return self._read('rooms')

    def list_time_slots(self) -> List[TimeSlotTemplate]:
        return self._read('timings')

    def list_timetable_entries(self) -> List[TimetableEntry]:
        return self._read('timetable')

    def replace_timetable_entries(self, entries: List[TimetableEntry]) -> None:
        self._write('timetable', list(entries))

    def list_records(self, collection: str) -> List[Any]:
        self._check_collection(collection)
        return self._read(collection)

    def replace_records(self, collection: str, records: List[Any]) -> None:
        self._check_collection(collection)
        self._write(collection, list(records))

    def get(self, collection: str, record_id: str) -> Any:
        for record in self.list_records(collection):
            if record.id == record_id:
                return record
        raise RecordNotFound(collection, record_id)

    def add(self, collection: str, record: Any) -> Any:
        """
        Append a record, generating an id if it has none.

        Returns:
            The stored record
        """
        self._check_collection(collection)
        record_type = COLLECTIONS[collection]
        if not isinstance(record, record_type):
            raise ValueError(f"{collection} expects {record_type.__name__}, got {type(record).__name__}")

        if not record.id:
            record = dataclasses.replace(record, id=new_id())

        records = self._read(collection)
        if any(r.id == record.id for r in records):
            raise ValueError(f"{collection} record {record.id} already exists")

        records.append(record)
        self._write(collection, records)
        logger.info(f"Added {collection} record {record.id}")
        return record

    def update(self, collection: str, record_id: str, changes: Dict[str, Any]) -> Any:
        """
        Apply field changes to a stored record.

        Returns:
            The updated record
        """
        self._check_collection(collection)
        records = self._read(collection)

        for index, record in enumerate(records):
            if record.id == record_id:
                changes = {k: v for k, v in changes.items() if k != 'id'}
                # A new start or end time invalidates the stored duration
                if collection == 'timings' and 'duration' not in changes and \
                        ('start_time' in changes or 'end_time' in changes):
                    changes['duration'] = None
                try:
                    updated = dataclasses.replace(record, **changes)
                except (TypeError, ValueError, AttributeError) as e:
                    raise ValueError(f"Invalid fields for {collection}: {e}") from e
                records[index] = updated
                self._write(collection, records)
                logger.info(f"Updated {collection} record {record_id}")
                return updated

        raise RecordNotFound(collection, record_id)

    def delete(self, collection: str, record_id: str) -> bool:
        """
        Remove a record.

        Returns:
            True if a record was removed
        """
        self._check_collection(collection)
        records = self._read(collection)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False

        self._write(collection, remaining)
        logger.info(f"Deleted {collection} record {record_id}")
        return True


class InMemoryStore(TimetableStore):
    """List-backed store, mostly for tests and throwaway sessions."""

    def __init__(self, **collections: List[Any]):
        self._data: Dict[str, List[Any]] = {name: [] for name in COLLECTIONS}
        for name, records in collections.items():
            self._check_collection(name)
            self._data[name] = list(records)

    def _read(self, collection: str) -> List[Any]:
        return list(self._data[collection])

    def _write(self, collection: str, records: List[Any]) -> None:
        self._data[collection] = list(records)
