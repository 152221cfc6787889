from tournament_engine.models.constraints import DayHours, FormatConfig, TournamentConstraints
from tournament_engine.models.match import Match
from tournament_engine.models.participant import Participant
from tournament_engine.models.tournament import Tournament

__all__ = [
    "DayHours",
    "FormatConfig",
    "TournamentConstraints",
    "Tournament",
    "Participant",
    "Match",
]
