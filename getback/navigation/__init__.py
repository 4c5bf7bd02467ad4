"""
Navigation towards a destination.
"""

from .navigator import Navigator
from .service import NavigationSession

__all__ = ["Navigator", "NavigationSession"]
