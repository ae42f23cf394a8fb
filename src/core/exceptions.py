"""Custom exceptions shared by all layers."""


class ScoringError(Exception):
    """Top-level exception for anything raised by this package."""


class InvalidAddressError(ScoringError):
    """A side, roster position, row or game index that does not exist on the score sheet."""


class ScheduleError(ScoringError):
    """The pairing schedule does not describe a valid 3v3 fixture."""


class StorageError(ScoringError):
    """Writing to (or deleting from) the storage slot failed."""
