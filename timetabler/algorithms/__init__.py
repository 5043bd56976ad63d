# Initialize algorithms package
from . import slots
from . import tracker
from . import conflicts
from . import greedy

__all__ = ['slots', 'tracker', 'conflicts', 'greedy']
