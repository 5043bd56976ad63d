"""
Timetable service module.

This module provides the operations callers use: full generation, manual
entry insertion and the available-slots report. It reads catalog snapshots
from a store, runs the engine and writes the timetable back.
"""
import logging
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Any

import pandas as pd

from .algorithms.conflicts import find_conflict, check_availability
from .algorithms.greedy import GreedyAssigner
from .algorithms.slots import expand_slots
from .config import get_store_config
from .data.converter import DataConverter
from .data.loader import CsvTimetableStore
from .data.store import TimetableStore, InMemoryStore, new_id
from .models.entities import (
    EntryCandidate, EntryAdded, GenerationResult, ManualEntryResult, SlotAvailability
)

logger = logging.getLogger(__name__)


def create_store(backend: Optional[str] = None, data_dir: Optional[str] = None) -> TimetableStore:
    """
    Build the configured store.

    Args:
        backend: 'csv' or 'memory' (defaults to TIMETABLE_STORE)
        data_dir: CSV directory (defaults to TIMETABLE_DATA_DIR)
    """
    config = get_store_config()
    backend = (backend or config['backend']).lower()

    if backend == 'memory':
        return InMemoryStore()
    if backend == 'csv':
        return CsvTimetableStore(data_dir or config['data_dir'], create=True)

    raise ValueError(f"Unknown store backend: {backend}")


class TimetableService:
    """
    Main timetable service.

    This class is responsible for:
    - Generating a fresh timetable from the current catalogs
    - Inserting manual entries after conflict and availability checks
    - Reporting free slots for manual scheduling

    Operations that read and then write the timetable hold a lock for the
    whole read-compute-write cycle.
    """

    def __init__(self, store: TimetableStore):
        """
        Initialize the service.

        Args:
            store: Store holding catalogs and the timetable
        """
        self.store = store
        self.converter = DataConverter()
        self._lock = threading.Lock()

        self.metrics = {
            'load_time': 0,
            'generation_time': 0,
            'save_time': 0,
            'total_time': 0
        }

    def generate_timetable(self) -> GenerationResult:
        """
        Rebuild the timetable from scratch.

        The stored timetable is only replaced when generation gets past its
        preconditions.

        Returns:
            GenerationResult with the new entries and a summary message
        """
        total_start_time = time.time()
        logger.info("Starting timetable generation")

        with self._lock:
            start_time = time.time()
            assigner = GreedyAssigner(
                courses=self.store.list_courses(),
                teachers=self.store.list_teachers(),
                rooms=self.store.list_rooms(),
                time_slots=self.store.list_time_slots()
            )
            self.metrics['load_time'] = time.time() - start_time

            start_time = time.time()
            result = assigner.optimize()
            self.metrics['generation_time'] = time.time() - start_time

            if result.success:
                start_time = time.time()
                self.store.replace_timetable_entries(result.entries)
                self.metrics['save_time'] = time.time() - start_time

        self.metrics['total_time'] = time.time() - total_start_time
        result.metrics = dict(self.metrics)

        if result.success:
            logger.info(result.message)
        else:
            logger.warning(f"Timetable generation failed: {result.message}")

        return result

    def insert_manual_entry(self, candidate: EntryCandidate) -> ManualEntryResult:
        """
        Add one entry to the timetable if it collides with nothing.

        Args:
            candidate: Requested entry

        Returns:
            EntryAdded, or ScheduleConflict / TeacherUnavailable without
            touching the stored timetable
        """
        with self._lock:
            entries = self.store.list_timetable_entries()

            conflict = find_conflict(candidate, entries)
            if conflict is not None:
                logger.warning(conflict.message)
                return conflict

            unavailable = check_availability(candidate, self.store.list_teachers())
            if unavailable is not None:
                logger.warning(unavailable.message)
                return unavailable

            entry = candidate.to_entry(new_id())
            self.store.replace_timetable_entries(entries + [entry])

        logger.info(f"Added manual entry {entry.id}: {entry.course} on {entry.day} at {entry.start_time}")
        return EntryAdded(entry)

    def available_slots(self) -> List[SlotAvailability]:
        """
        Report schedulable slots not used by any stored entry.

        Returns:
            One SlotAvailability per free slot instance, in template order
            then day order
        """
        entries = self.store.list_timetable_entries()
        teachers = self.store.list_teachers()
        rooms = self.store.list_rooms()

        report = []
        for instance in expand_slots(self.store.list_time_slots()):
            at_slot = [e for e in entries if e.key == instance.key]
            if at_slot:
                continue

            booked_rooms = {e.room for e in at_slot}
            report.append(SlotAvailability(
                day=instance.day,
                start_time=instance.start_time,
                end_time=instance.end_time,
                duration=instance.duration,
                kind=instance.kind,
                available_teachers=[t.name for t in teachers if t.is_available(instance.day)],
                available_rooms=[r.name for r in rooms if r.name not in booked_rooms]
            ))

        return report

    def clear_timetable(self) -> None:
        with self._lock:
            self.store.replace_timetable_entries([])
        logger.info("Timetable cleared")

    def delete_entry(self, entry_id: str) -> bool:
        with self._lock:
            return self.store.delete('timetable', entry_id)

    def timetable_grid(self) -> pd.DataFrame:
        """Stored timetable as a start time by weekday grid."""
        return self.converter.convert_to_timetable_grid(self.store.list_timetable_entries())

    def export_timetable(self, output_dir: str) -> Dict[str, str]:
        """
        Save the stored timetable to CSV files.

        Args:
            output_dir: Directory for the exported files

        Returns:
            Dictionary of output file paths
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Exporting timetable to {output_dir}")

        entries = self.store.list_timetable_entries()
        output_files = {
            'timetable': str(output_dir / 'Timetable_Entries.csv'),
            'grid': str(output_dir / 'Timetable_Grid.csv')
        }

        self.converter.to_records('timetable', entries).to_csv(output_files['timetable'], index=False)
        self.converter.convert_to_timetable_grid(entries).to_csv(output_files['grid'])

        return output_files

    def summary(self) -> Dict[str, Any]:
        """Record counts for each collection."""
        return {
            'courses': len(self.store.list_courses()),
            'teachers': len(self.store.list_teachers()),
            'rooms': len(self.store.list_rooms()),
            'timings': len(self.store.list_time_slots()),
            'entries': len(self.store.list_timetable_entries())
        }
