"""
API views for the location hierarchy.
"""

from .locations import *  # noqa: F401,F403
