# Initialize data package
from . import store
from . import converter
from . import loader
from . import seed

__all__ = ['store', 'converter', 'loader', 'seed']
