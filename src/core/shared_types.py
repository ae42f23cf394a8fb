"""
Type definitions used across layers
"""

from enum import StrEnum


class Side(StrEnum):
    HOME = "home"
    AWAY = "away"


class LoadOutcome(StrEnum):
    LOADED = "loaded"
    MISSING = "missing"
    UNPARSEABLE = "unparseable"
    INCOMPATIBLE = "incompatible"
