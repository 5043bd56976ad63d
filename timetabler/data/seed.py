"""
Sample catalog used to try the scheduler out.
"""
import logging

from ..models.entities import Course, Teacher, Room, TimeSlotTemplate
from .store import TimetableStore

logger = logging.getLogger(__name__)

WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']

SAMPLE_COURSES = [
    Course(id='1', name='Advanced Mathematics', code='MATH101', credits=3, department='Mathematics',
           description='Advanced mathematical concepts and applications'),
    Course(id='2', name='Computer Science Fundamentals', code='CS101', credits=4, department='Computer Science',
           description='Introduction to programming and computer science'),
    Course(id='3', name='Physics Lab', code='PHYS201', credits=2, department='Physics',
           description='Hands-on physics laboratory experiments'),
    Course(id='4', name='English Literature', code='ENG101', credits=3, department='English',
           description='Study of classic and contemporary literature'),
]

SAMPLE_TEACHERS = [
    Teacher(id='1', name='Dr. Sarah Johnson', department='Mathematics',
            subjects={'Advanced Mathematics', 'Calculus', 'Statistics'},
            availability={'Monday', 'Tuesday', 'Wednesday', 'Friday'},
            email='sarah.johnson@school.edu', phone='+1 (555) 123-4567'),
    Teacher(id='2', name='Prof. Michael Smith', department='Computer Science',
            subjects={'Programming', 'Data Structures', 'Algorithms'},
            availability={'Monday', 'Wednesday', 'Thursday', 'Friday'},
            email='michael.smith@school.edu', phone='+1 (555) 234-5678'),
    Teacher(id='3', name='Dr. Emily Davis', department='Physics',
            subjects={'General Physics', 'Quantum Mechanics', 'Laboratory'},
            availability={'Tuesday', 'Wednesday', 'Thursday', 'Friday'},
            email='emily.davis@school.edu', phone='+1 (555) 345-6789'),
    Teacher(id='4', name='Prof. John Wilson', department='English',
            subjects={'English Literature', 'Creative Writing', 'Poetry'},
            availability={'Monday', 'Tuesday', 'Thursday', 'Friday'},
            email='john.wilson@school.edu', phone='+1 (555) 456-7890'),
]

SAMPLE_ROOMS = [
    Room(id='1', name='A-101', capacity=30, type='Classroom',
         equipment={'Projector', 'Whiteboard', 'Computer'}, building='Building A'),
    Room(id='2', name='B-201', capacity=25, type='Computer Lab',
         equipment={'Computers', 'Projector', 'Whiteboard'}, building='Building B'),
    Room(id='3', name='Lab-301', capacity=20, type='Laboratory',
         equipment={'Lab Equipment', 'Safety Gear', 'Computers'}, building='Science Building'),
    Room(id='4', name='C-105', capacity=35, type='Seminar Room',
         equipment={'Projector', 'Whiteboard', 'Audio System'}, building='Building C'),
]

SAMPLE_TIMINGS = [
    TimeSlotTemplate(id='1', name='Morning Lecture 1', start_time='08:00', end_time='09:30',
                     kind='lecture', days=list(WEEKDAYS)),
    TimeSlotTemplate(id='2', name='Morning Break', start_time='09:30', end_time='09:45',
                     kind='break', days=list(WEEKDAYS)),
    TimeSlotTemplate(id='3', name='Morning Lecture 2', start_time='09:45', end_time='11:15',
                     kind='lecture', days=list(WEEKDAYS)),
    TimeSlotTemplate(id='4', name='Lunch Break', start_time='12:00', end_time='13:00',
                     kind='lunch', days=list(WEEKDAYS)),
    TimeSlotTemplate(id='5', name='Afternoon Lab', start_time='14:00', end_time='17:00',
                     kind='lab', days=['Tuesday', 'Thursday']),
]


def seed_sample_data(store: TimetableStore) -> None:
    """
    Replace the store's catalogs with the sample data and clear the timetable.
    """
    logger.info("Seeding store with sample data...")

    store.replace_records('courses', list(SAMPLE_COURSES))
    store.replace_records('teachers', list(SAMPLE_TEACHERS))
    store.replace_records('rooms', list(SAMPLE_ROOMS))
    store.replace_records('timings', list(SAMPLE_TIMINGS))
    store.replace_timetable_entries([])

    logger.info(f"Seeded {len(SAMPLE_COURSES)} courses, {len(SAMPLE_TEACHERS)} teachers, "
                f"{len(SAMPLE_ROOMS)} rooms and {len(SAMPLE_TIMINGS)} time slots")
