"""Errors raised by the daily practice engine and its store helpers."""


class PracticeError(Exception):
    """Base class for every error the engine reports to its caller."""


class NotFoundError(PracticeError):
    """A problem or a day's assignment row does not exist."""


class AlreadyCompletedError(PracticeError):
    """The assignment for (date, problem) was already completed."""


class NoCandidateAvailableError(PracticeError):
    """No eligible problem is left to take over an assignment slot."""


class InvalidOutcomeError(PracticeError, ValueError):
    """A reported outcome is not one of struggling, okay or mastered."""


class DuplicateProblemError(PracticeError):
    """Another problem already uses the same link."""


class StoreError(PracticeError):
    """The problem store could not complete a read, write or transaction."""
