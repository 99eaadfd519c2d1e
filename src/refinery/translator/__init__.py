"""
Translation from interval predicates to SMT constraints.
"""

from .interval_translator import IntervalTranslator

__all__ = [
    "IntervalTranslator",
]
