"""
Fixture engine errors.

Every failure is a value-level error returned to the caller; none is fatal and none is
retried (the engine is a deterministic function of its inputs). Routes map them to 4xx.
"""


class FixtureEngineError(Exception):
    """Base exception for capacity and fixture generation errors"""
    pass


class InvalidConstraints(FixtureEngineError):
    """Computed capacity < 2, or malformed operational hours"""
    pass


class InvalidSize(FixtureEngineError):
    """Bracket size is not a power of two >= 2"""
    pass


class InsufficientParticipants(FixtureEngineError):
    """Fewer than 2 participants (or a group with fewer than 2)"""
    pass


class UnsupportedFormat(FixtureEngineError):
    """Format type not recognized by the generator dispatch"""
    pass


class CapacityExceeded(FixtureEngineError):
    """Generated fixtures (or registrations) exceed what the tournament can hold"""
    pass


class TournamentNotFound(FixtureEngineError):
    pass


class TournamentStateError(FixtureEngineError):
    """Operation not allowed in the tournament's current status"""
    pass
