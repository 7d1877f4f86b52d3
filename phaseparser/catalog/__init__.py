"""
Static boss and phase catalog.
"""

from .bosses import (
    Boss,
    PhaseDescriptor,
    BOSSES,
    find_by_boss_id,
    get_boss_phases,
    register_boss,
)
from .loader import CatalogLoader, load_and_apply_catalog

__all__ = [
    "Boss",
    "PhaseDescriptor",
    "BOSSES",
    "find_by_boss_id",
    "get_boss_phases",
    "register_boss",
    "CatalogLoader",
    "load_and_apply_catalog",
]
