"""
Academic timetable manager.
Generates conflict-free course timetables and checks manual entries.
"""
__version__ = "0.1.0"
