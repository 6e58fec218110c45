"""Re-export individual schema modules for easy imports."""

from .menu import (
    DatabaseStats,
    DatabaseSummary,
    MenuCreate,
    MenuOut,
    MenuUpdate,
    SeedResult,
)

__all__ = [
    "DatabaseStats",
    "DatabaseSummary",
    "MenuCreate",
    "MenuOut",
    "MenuUpdate",
    "SeedResult",
]
