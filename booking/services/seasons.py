"""
Seasonal multiplier resolution.

A season carries one or more recurring annual periods (only month and day are
significant) and a price multiplier. For a rental the season whose periods
cover the most rental days wins; with no overlap the admin-designated current
season is used, and failing that the neutral multiplier 1.0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

from .calendar import month_day, parse_day

logger = logging.getLogger(__name__)

NEUTRAL_MULTIPLIER = Decimal("1.0")


@dataclass(frozen=True)
class SeasonPeriod:
    start_date: object
    end_date: object


@dataclass(frozen=True)
class SeasonRule:
    id: object
    name: str
    multiplier: Decimal
    periods: tuple[SeasonPeriod, ...] = field(default_factory=tuple)
    is_active: bool = True


@dataclass(frozen=True)
class SeasonMatch:
    multiplier: Decimal
    season_id: object = None
    season_name: str | None = None
    overlap_days: int = 0


def _as_multiplier(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _in_window(md: tuple[int, int], start: tuple[int, int], end: tuple[int, int]) -> bool:
    if start <= end:
        return start <= md <= end
    # Window wraps the new year, e.g. 12-15 .. 01-05.
    return md >= start or md <= end


def period_contains(day, period) -> bool:
    """True when ``day`` falls inside the recurring ``period`` (inclusive)."""
    return _in_window(month_day(parse_day(day)), month_day(period.start_date), month_day(period.end_date))


def overlap_count(days: Iterable, season) -> int:
    """Number of distinct rental days covered by at least one of the season's periods."""
    windows = [(month_day(p.start_date), month_day(p.end_date)) for p in season.periods]
    covered = set()
    for day in days:
        day = parse_day(day)
        if day in covered:
            continue
        md = month_day(day)
        if any(_in_window(md, start, end) for start, end in windows):
            covered.add(day)
    return len(covered)


def _match_for(season, overlap_days: int = 0) -> SeasonMatch:
    return SeasonMatch(
        multiplier=_as_multiplier(season.multiplier),
        season_id=season.id,
        season_name=season.name,
        overlap_days=overlap_days,
    )


def resolve_multiplier(days: Sequence, active_seasons: Sequence, current_season=None) -> SeasonMatch:
    """
    Pick the multiplier that applies to the rental ``days``.

    The season with the strictly largest overlap wins; on a tie the season
    listed first keeps the win. Falls back to ``current_season`` when it is
    active, otherwise to the neutral multiplier.
    """
    winner = None
    best = 0
    tied = []
    for season in active_seasons:
        if not season.is_active:
            continue
        count = overlap_count(days, season)
        if count == 0:
            continue
        if count > best:
            winner, best, tied = season, count, []
        elif count == best:
            tied.append(season)

    if winner is not None:
        if tied:
            logger.warning(
                "Seasons tie on %d overlapping days (%s); using %r.",
                best,
                ", ".join(repr(s.name) for s in [winner, *tied]),
                winner.name,
            )
        return _match_for(winner, best)

    if current_season is not None and current_season.is_active:
        return _match_for(current_season)
    return SeasonMatch(multiplier=NEUTRAL_MULTIPLIER)


def season_snapshot() -> tuple[list[SeasonRule], SeasonRule | None]:
    """Load active seasons and the current-season pointer for one calculation."""
    from ..models import CurrentSeason, Season

    active = [season.as_rule() for season in Season.objects.filter(is_active=True).prefetch_related("periods")]
    return active, CurrentSeason.get_rule()
