"""
Bootcamp Admin Package
Course management backend and admin page client.
"""

from .config import VERSION, VERSION_NAME
from .models import db

__version__ = VERSION
__all__ = ['db', 'VERSION', 'VERSION_NAME']
