"""
Slot expansion.

Turns recurring time slot templates into concrete per-day slot instances.
"""
import logging
from typing import Iterable, List

from ..models.entities import TimeSlotTemplate, SlotInstance

logger = logging.getLogger(__name__)


def expand_slots(templates: Iterable[TimeSlotTemplate]) -> List[SlotInstance]:
    """
    Expand templates into one slot instance per (template, day).

    Only lecture and lab templates are expanded; breaks and lunch are
    skipped. Instances come out in catalog order, then in each template's
    own day order.

    Args:
        templates: Time slot templates in catalog order

    Returns:
        List of SlotInstance objects (empty if nothing is schedulable)
    """
    instances = []

    for template in templates:
        if not template.is_schedulable:
            logger.debug(f"Skipping {template.kind} slot {template.name}")
            continue

        for day in template.days:
            instances.append(SlotInstance(
                day=day,
                start_time=template.start_time,
                end_time=template.end_time,
                kind=template.kind,
                duration=template.duration
            ))

    return instances
