"""
Operational capacity: how many participants a tournament can support.

Computed once at tournament creation, before any participant registers:

- match slots by daily cap = max_matches_per_day * days
- venue slots = (avg daily operational minutes // (match duration + buffer)) * venues * days
- governing slots = the tighter of the two
- capacity = format-specific inversion of "n participants need f(n) matches"

Pure function of TournamentConstraints: same inputs always yield the same capacity.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from tournament_engine.models.constraints import DayHours, TournamentConstraints
from tournament_engine.services.engine_errors import InvalidConstraints
from tournament_engine.services.format_rules import (
    ADVANCERS_PER_GROUP,
    DEFAULT_SWISS_ROUNDS,
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_GROUP_TO_KNOCKOUT,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    MIN_PARTICIPANTS,
    rr_match_count,
)

logger = logging.getLogger(__name__)


@dataclass
class CapacityBreakdown:
    days: int
    slots_by_daily_cap: int
    daily_operational_minutes: int
    matches_per_venue_per_day: int
    venue_slots: int
    total_match_slots: int


def _parse_clock(value: str) -> Tuple[int, int]:
    """Parse "HH:MM" into (hour, minute)."""
    try:
        hour_str, minute_str = value.strip().split(":")
        hour, minute = int(hour_str), int(minute_str)
    except (AttributeError, ValueError):
        raise InvalidConstraints(f"Operational hours must be HH:MM, got {value!r}")
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidConstraints(f"Operational hours out of range: {value!r}")
    return hour, minute


def _minutes_between(hours: DayHours) -> int:
    """Minutes from start_time to end_time (same-day). 0 if end is not after start."""
    start_h, start_m = _parse_clock(hours.start_time)
    end_h, end_m = _parse_clock(hours.end_time)
    start_min = start_h * 60 + start_m
    end_min = end_h * 60 + end_m
    return end_min - start_min if end_min > start_min else 0


def daily_operational_minutes(constraints: TournamentConstraints) -> int:
    """
    Average operational minutes over the configured weekdays.

    Weekdays with no window (or an empty/inverted one) are excluded from the average.
    No usable window at all -> 0.
    """
    total_minutes = 0
    days_count = 0
    for day in sorted(constraints.operational_hours):
        minutes = _minutes_between(constraints.operational_hours[day])
        if minutes > 0:
            total_minutes += minutes
            days_count += 1

    if days_count == 0:
        return 0
    return total_minutes // days_count


def resolve_match_slots(constraints: TournamentConstraints) -> CapacityBreakdown:
    """Total match slots available: the tighter of the daily cap and venue time."""
    days = constraints.days
    slots_by_daily_cap = constraints.max_matches_per_day * days

    daily_minutes = daily_operational_minutes(constraints)
    matches_per_venue_per_day = daily_minutes // (constraints.avg_match_duration + constraints.buffer_time)
    venue_slots = matches_per_venue_per_day * constraints.venue_count * days

    logger.debug(
        "Capacity slots: %d days x %d matches/day = %d; venue: %d min/day // %d = %d/venue/day -> %d",
        days,
        constraints.max_matches_per_day,
        slots_by_daily_cap,
        daily_minutes,
        constraints.avg_match_duration + constraints.buffer_time,
        matches_per_venue_per_day,
        venue_slots,
    )

    return CapacityBreakdown(
        days=days,
        slots_by_daily_cap=slots_by_daily_cap,
        daily_operational_minutes=daily_minutes,
        matches_per_venue_per_day=matches_per_venue_per_day,
        venue_slots=venue_slots,
        total_match_slots=min(slots_by_daily_cap, venue_slots),
    )


def capacity_for_slots(format_type: str, total_match_slots: int, format_config=None) -> int:
    """
    Invert "n participants need f(n) matches" for the given format.

    - single_elimination: n - 1 matches
    - double_elimination: ~2n - 2 matches
    - round_robin: n(n-1)/2 matches (largest n that fits)
    - group_to_knockout: group round robins + knockout of the top 2 per group
    - swiss: rounds * n/2 matches
    - anything else: conservative slots // 3
    """
    slots = total_match_slots

    if format_type == FORMAT_SINGLE_ELIMINATION:
        return slots + 1

    if format_type == FORMAT_DOUBLE_ELIMINATION:
        return (slots + 2) // 2

    if format_type == FORMAT_ROUND_ROBIN:
        n = int((1 + math.sqrt(1 + 8 * slots)) / 2)
        while n > 0 and rr_match_count(n) > slots:
            n -= 1
        return n

    if format_type == FORMAT_GROUP_TO_KNOCKOUT:
        group_size = format_config.group_size if format_config else None
        num_groups = format_config.number_of_groups if format_config else None
        if not group_size or not num_groups:
            return slots // 3

        group_stage_matches = num_groups * rr_match_count(group_size)
        knockout_matches = num_groups * ADVANCERS_PER_GROUP - 1
        required = group_stage_matches + knockout_matches
        full_field = num_groups * group_size
        if required <= slots:
            return full_field
        # Scale down proportionally
        return (full_field * slots) // required

    if format_type == FORMAT_SWISS:
        rounds = DEFAULT_SWISS_ROUNDS
        if format_config and format_config.number_of_rounds:
            rounds = format_config.number_of_rounds
        return (slots * 2) // rounds

    return slots // 3


def calculate_capacity(constraints: TournamentConstraints) -> int:
    """
    Maximum participant count the constraints support.

    Raises:
        InvalidConstraints: capacity < 2, or operational hours not in HH:MM form
    """
    breakdown = resolve_match_slots(constraints)
    capacity = capacity_for_slots(
        constraints.format_type, breakdown.total_match_slots, constraints.format_config
    )

    logger.info(
        "Calculated capacity: %d participants for %s (%d match slots over %d days)",
        capacity,
        constraints.format_type or "custom",
        breakdown.total_match_slots,
        breakdown.days,
    )

    if capacity < MIN_PARTICIPANTS:
        raise InvalidConstraints(
            f"Constraints support only {capacity} participant(s); at least {MIN_PARTICIPANTS} are required "
            f"({breakdown.total_match_slots} match slots over {breakdown.days} day(s))"
        )
    return capacity
