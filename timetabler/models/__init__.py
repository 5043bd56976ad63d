# Initialize models package
from . import entities

__all__ = ['entities']
