"""
Domain models and value objects.

Contains immutable snapshots of core values for debugging and dumps.
"""

from src.core.domain.natural_snapshot import NaturalSnapshot

__all__ = [
    "NaturalSnapshot",
]
