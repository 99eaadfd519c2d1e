"""
Static analyses over interval bounds.
"""

from .bounds_analyzer import BoundsAnalyzer

__all__ = [
    "BoundsAnalyzer",
]
