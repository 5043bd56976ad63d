"""
Occupancy tracking for a single generation run.
"""
from collections import defaultdict
from typing import Dict, List, Set

from ..models.entities import SlotInstance, SlotKey


class AvailabilityTracker:
    """
    Tracks which slot keys are taken, and by which teachers and rooms.

    A tracker is created empty at the start of a run and thrown away at
    the end; it is never shared between runs.
    """

    def __init__(self):
        self.teacher_slots: Dict[str, Set[SlotKey]] = defaultdict(set)
        self.room_slots: Dict[str, Set[SlotKey]] = defaultdict(set)
        self.filled: Dict[SlotKey, bool] = {}
        self._instances: Dict[SlotKey, SlotInstance] = {}

    def register(self, instance: SlotInstance) -> None:
        """
        Make a slot instance known to the tracker.

        A key registered twice keeps its first position but takes the
        attributes of the latest instance.
        """
        self._instances[instance.key] = instance
        self.filled.setdefault(instance.key, False)

    def slots(self) -> List[SlotInstance]:
        """Every registered slot, one per key, in registration order."""
        return list(self._instances.values())

    def is_slot_free(self, key: SlotKey) -> bool:
        return not self.filled.get(key, False)

    def is_teacher_free(self, teacher_id: str, key: SlotKey) -> bool:
        return key not in self.teacher_slots.get(teacher_id, ())

    def is_room_free(self, room_id: str, key: SlotKey) -> bool:
        return key not in self.room_slots.get(room_id, ())

    def commit(self, teacher_id: str, room_id: str, key: SlotKey) -> None:
        """Claim the slot key for a teacher and a room."""
        self.teacher_slots[teacher_id].add(key)
        self.room_slots[room_id].add(key)
        self.filled[key] = True

    @property
    def occupied_count(self) -> int:
        return sum(1 for taken in self.filled.values() if taken)
