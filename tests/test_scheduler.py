"""
Tests for the timetable service and the CSV store.
"""
import os
from pathlib import Path

import pandas as pd
import pytest

from timetabler.data.loader import CsvTimetableStore
from timetabler.data.seed import seed_sample_data
from timetabler.data.store import InMemoryStore, RecordNotFound
from timetabler.models.entities import (
    EntryCandidate, EntryAdded, ScheduleConflict, TeacherUnavailable, PreconditionKind, Course
)
from timetabler.scheduler import TimetableService, create_store

from conftest import make_course, make_teacher, make_room, make_slot


def without_ids(entries):
    return [{k: v for k, v in e.to_dict().items() if k != 'id'} for e in entries]


class TestTimetableService:
    """Test the TimetableService class."""

    def test_generate_persists_entries(self, sample_service):
        result = sample_service.generate_timetable()

        assert result.success is True
        assert "Assigned 4 of 4" in result.message
        assert sample_service.store.list_timetable_entries() == result.entries
        assert result.metrics['total_time'] >= 0

    def test_generate_twice_gives_same_timetable(self, sample_service):
        first = sample_service.generate_timetable()
        second = sample_service.generate_timetable()

        assert without_ids(first.entries) == without_ids(second.entries)
        assert len(sample_service.store.list_timetable_entries()) == len(first.entries)

    def test_generate_replaces_manual_entries(self, sample_service):
        sample_service.insert_manual_entry(EntryCandidate(
            course='Extra', teacher='Dr. Emily Davis', room='C-105', day='Friday', start_time='14:00'))

        result = sample_service.generate_timetable()

        assert 'Extra' not in {e.course for e in sample_service.store.list_timetable_entries()}
        assert len(sample_service.store.list_timetable_entries()) == len(result.entries)

    def test_failed_generation_keeps_existing_timetable(self, sample_store):
        service = TimetableService(sample_store)
        service.generate_timetable()
        before = sample_store.list_timetable_entries()

        sample_store.replace_records('timings', [])
        result = service.generate_timetable()

        assert result.success is False
        assert result.reason == PreconditionKind.MISSING_TIMESLOTS
        assert sample_store.list_timetable_entries() == before

    def test_manual_conflict_on_teacher(self, empty_service):
        first = empty_service.insert_manual_entry(EntryCandidate(
            course='Algebra', teacher='T1', room='R1', day='Tuesday', start_time='09:00'))
        second = empty_service.insert_manual_entry(EntryCandidate(
            course='Physics', teacher='T1', room='R2', day='Tuesday', start_time='09:00'))

        assert isinstance(first, EntryAdded)
        assert isinstance(second, ScheduleConflict)
        assert second.resource == 'T1'
        assert 'T1' in second.message
        assert empty_service.store.list_timetable_entries() == [first.entry]

    def test_manual_entry_unavailable_teacher(self, empty_service):
        empty_service.store.add('teachers', make_teacher('', ['Monday'], name='T1'))

        result = empty_service.insert_manual_entry(EntryCandidate(
            course='Algebra', teacher='T1', room='R1', day='Tuesday', start_time='09:00'))

        assert isinstance(result, TeacherUnavailable)
        assert empty_service.store.list_timetable_entries() == []

    def test_manual_entries_in_parallel_rooms(self, empty_service):
        first = empty_service.insert_manual_entry(EntryCandidate(
            course='Algebra', teacher='T1', room='R1', day='Tuesday', start_time='09:00', end_time='10:30'))
        second = empty_service.insert_manual_entry(EntryCandidate(
            course='Physics', teacher='T2', room='R2', day='Tuesday', start_time='09:00'))

        assert isinstance(first, EntryAdded) and isinstance(second, EntryAdded)
        assert first.entry.duration == 90
        assert first.entry.id != second.entry.id
        assert len(empty_service.store.list_timetable_entries()) == 2

    def test_available_slots_excludes_used_keys(self, sample_service):
        sample_service.generate_timetable()

        slots = sample_service.available_slots()

        used = {e.key for e in sample_service.store.list_timetable_entries()}
        assert len(slots) == 12 - len(used)
        assert all((s.day, s.start_time) not in used for s in slots)

        friday = next(s for s in slots if s.day == 'Friday' and s.start_time == '08:00')
        assert friday.available_teachers == [
            'Dr. Sarah Johnson', 'Prof. Michael Smith', 'Dr. Emily Davis', 'Prof. John Wilson'
        ]
        assert friday.available_rooms == ['A-101', 'B-201', 'Lab-301', 'C-105']

        thursday_lab = next(s for s in slots if s.day == 'Thursday' and s.start_time == '14:00')
        assert thursday_lab.kind == 'lab'
        assert 'Dr. Sarah Johnson' not in thursday_lab.available_teachers

    def test_available_slots_does_not_mutate(self, sample_service):
        sample_service.available_slots()
        assert sample_service.store.list_timetable_entries() == []

    def test_clear_and_delete(self, sample_service):
        result = sample_service.generate_timetable()

        assert sample_service.delete_entry(result.entries[0].id) is True
        assert sample_service.delete_entry('missing') is False
        assert len(sample_service.store.list_timetable_entries()) == 3

        sample_service.clear_timetable()
        assert sample_service.store.list_timetable_entries() == []

    def test_timetable_grid(self, sample_service):
        sample_service.generate_timetable()

        grid = sample_service.timetable_grid()

        assert list(grid.columns) == ['Monday', 'Tuesday', 'Wednesday', 'Thursday']
        assert list(grid.index) == ['08:00']
        assert grid.loc['08:00', 'Monday'] == 'Advanced Mathematics (Dr. Sarah Johnson, A-101)'

    def test_empty_grid(self, empty_service):
        assert empty_service.timetable_grid().empty

    def test_export(self, sample_service, data_dir):
        sample_service.generate_timetable()

        output_files = sample_service.export_timetable(os.path.join(data_dir, 'out'))

        for file_path in output_files.values():
            assert os.path.exists(file_path)
        assert len(pd.read_csv(output_files['timetable'])) == 4

    def test_create_store_backends(self, data_dir):
        assert isinstance(create_store('memory'), InMemoryStore)
        assert isinstance(create_store('csv', data_dir), CsvTimetableStore)
        with pytest.raises(ValueError):
            create_store('sqlite')


class TestCsvTimetableStore:
    """Test the CSV-backed store."""

    def test_missing_directory(self, data_dir):
        with pytest.raises(FileNotFoundError):
            CsvTimetableStore(os.path.join(data_dir, 'missing'))

    def test_empty_directory_has_empty_collections(self, data_dir):
        store = CsvTimetableStore(data_dir)

        assert store.list_courses() == []
        assert store.list_timetable_entries() == []

    def test_seeded_catalog_round_trip(self, data_dir):
        store = CsvTimetableStore(data_dir)
        seed_sample_data(store)

        teachers = store.list_teachers()
        timings = store.list_time_slots()

        assert (Path(data_dir) / 'Teachers.csv').exists()
        assert teachers[0].availability == {'Monday', 'Tuesday', 'Wednesday', 'Friday'}
        assert 'Calculus' in teachers[0].subjects
        assert timings[4].days == ['Tuesday', 'Thursday']
        assert timings[4].duration == 180
        assert store.list_rooms()[2].capacity == 20

    def test_generation_against_csv_store(self, data_dir):
        store = CsvTimetableStore(data_dir)
        seed_sample_data(store)

        result = TimetableService(store).generate_timetable()

        reloaded = CsvTimetableStore(data_dir).list_timetable_entries()
        assert without_ids(reloaded) == without_ids(result.entries)
        assert [e.id for e in reloaded] == [e.id for e in result.entries]

    def test_crud(self, data_dir):
        store = CsvTimetableStore(data_dir)

        added = store.add('courses', Course(id='', name='Chemistry', code='CHEM101', credits=3))
        assert added.id
        assert store.get('courses', added.id).name == 'Chemistry'

        updated = store.update('courses', added.id, {'credits': 4})
        assert updated.credits == 4
        assert store.list_courses()[0].credits == 4

        with pytest.raises(ValueError):
            store.add('courses', added)
        with pytest.raises(ValueError):
            store.update('courses', added.id, {'colour': 'blue'})
        with pytest.raises(RecordNotFound):
            store.update('courses', 'missing', {'credits': 1})

        assert store.delete('courses', added.id) is True
        assert store.list_courses() == []

    def test_update_timing_times(self, data_dir):
        store = CsvTimetableStore(data_dir)
        store.add('timings', make_slot('1', '09:00', '10:00', ['Monday']))

        assert store.update('timings', '1', {'end_time': '11:30'}).duration == 150
        assert store.update('timings', '1', {'start_time': '10:30', 'duration': 45}).duration == 45
        assert store.list_time_slots()[0].duration == 45

        with pytest.raises(ValueError):
            store.update('timings', '1', {'kind': 'seminar'})
        assert store.list_time_slots()[0].kind == 'lecture'

    def test_invalid_slot_kind(self, data_dir):
        pd.DataFrame([{'id': '1', 'name': 'Nap', 'start_time': '13:00', 'end_time': '14:00',
                       'duration': '', 'kind': 'nap', 'days': 'Monday'}]).to_csv(
            os.path.join(data_dir, 'Timings.csv'), index=False)

        with pytest.raises(ValueError):
            CsvTimetableStore(data_dir).list_time_slots()

    def test_validate_relationships(self, data_dir):
        store = CsvTimetableStore(data_dir)
        store.add('courses', make_course('c1', name='Algebra'))
        store.add('teachers', make_teacher('t1', ['Monday'], name='T1'))
        store.add('rooms', make_room('r1', name='R1'))
        store.add('timings', make_slot('1', '09:00', '10:00', ['Monday']))
        TimetableService(store).insert_manual_entry(EntryCandidate(
            course='Algebra', teacher='Ghost', room='R1', day='Monday', start_time='09:00'))

        data = store.load_all()

        issues = store.validate_relationships(data)
        assert len(issues) == 1
        assert 'Ghost' in issues[0]
