"""
Temporal context derivation.

Maps one instant and one timezone to a TemporalContext: calendar fields
(ISO week, quarter, day of year, ...) and period flags (business hours,
weekend, US market hours). Every field comes from a single snapshot of
the clock, so the record is always self-consistent.

Example summary:
    Thursday, November 20, 2025 at 04:06:25 AEDT

All functions are pure apart from reading the clock and the timezone
database, and are safe to call from multiple threads.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .logging_config import get_logger

logger = get_logger("temporal_context")

# IANA zones that observe US Eastern time (NYSE local time)
US_EASTERN_ZONES = frozenset({
    "America/New_York",
    "US/Eastern",
    "EST5EDT",
    "America/Detroit",
    "US/Michigan",
    "America/Fort_Wayne",
    "America/Indianapolis",
    "America/Indiana/Indianapolis",
    "America/Indiana/Marengo",
    "America/Indiana/Petersburg",
    "America/Indiana/Vevay",
    "America/Indiana/Vincennes",
    "America/Indiana/Winamac",
    "US/East-Indiana",
    "America/Kentucky/Louisville",
    "America/Kentucky/Monticello",
    "America/Louisville",
})

EASTERN_ABBREVIATIONS = frozenset({"EST", "EDT"})

DEFAULT_BUSINESS_HOURS: Tuple[int, int] = (9, 17)

# NYSE regular session, local Eastern time
MARKET_OPEN: Tuple[int, int] = (9, 30)
MARKET_CLOSE_HOUR = 16

TzArg = Union[tzinfo, str, None]


class TimezoneResolutionError(ValueError):
    """A timezone name could not be resolved against the tz database."""


@dataclass(frozen=True)
class TemporalContext:
    """Calendar fields and period flags for one instant in one zone."""

    utc_instant: datetime
    local_instant: datetime
    timezone: str
    timezone_abbreviation: str
    timezone_offset: str
    year: int
    month: int
    day: int
    day_of_year: int
    day_of_week: str
    day_of_week_num: int
    month_name: str
    iso_year: int
    week_of_year: int
    quarter: int
    hour: int
    minute: int
    second: int
    is_business_hours: bool
    is_weekend: bool
    is_market_hours: bool

    @property
    def unix_timestamp(self) -> int:
        return int(self.utc_instant.timestamp())

    @property
    def hour_12(self) -> str:
        """12-hour clock, e.g. '02 PM'."""
        return self.local_instant.strftime("%I %p")

    @property
    def time_summary(self) -> str:
        """e.g. 'Thursday, November 20, 2025 at 04:06:25 AEDT'."""
        return (
            f"{self.day_of_week}, {self.month_name} {self.day:02d}, {self.year} "
            f"at {self.hour:02d}:{self.minute:02d}:{self.second:02d} "
            f"{self.timezone_abbreviation}"
        )

    def to_dict(self) -> dict:
        """JSON-friendly view of the record (datetimes as ISO strings)."""
        return {
            "utc_instant": self.utc_instant.isoformat(),
            "local_instant": self.local_instant.isoformat(),
            "timezone": self.timezone,
            "timezone_abbreviation": self.timezone_abbreviation,
            "timezone_offset": self.timezone_offset,
            "unix_timestamp": self.unix_timestamp,
            "year": self.year,
            "month": self.month,
            "month_name": self.month_name,
            "day": self.day,
            "day_of_year": self.day_of_year,
            "day_of_week": self.day_of_week,
            "day_of_week_num": self.day_of_week_num,
            "iso_year": self.iso_year,
            "week_of_year": self.week_of_year,
            "quarter": self.quarter,
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "is_business_hours": self.is_business_hours,
            "is_weekend": self.is_weekend,
            "is_market_hours": self.is_market_hours,
            "time_summary": self.time_summary,
        }


def load_zone(name: str) -> ZoneInfo:
    """Look up an IANA zone by name.

    Args:
        name: Zone key, e.g. 'America/New_York'

    Raises:
        TimezoneResolutionError: If the name is empty, malformed or unknown
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise TimezoneResolutionError(f"Unknown timezone: {name!r}") from e


def _zone_from_localtime_link(link: Path = Path("/etc/localtime")) -> Optional[str]:
    """Read the zone key from the /etc/localtime symlink, if it is one."""
    try:
        target = str(link.resolve(strict=True))
    except OSError:
        return None
    marker = "zoneinfo/"
    if not link.is_symlink() or marker not in target:
        return None
    return target.split(marker, 1)[1]


def local_zone() -> Optional[ZoneInfo]:
    """Best-effort IANA zone for the host.

    Checks the TZ environment variable, then the /etc/localtime symlink.
    Returns None when neither names a known zone; callers then fall back
    to the C library's notion of local time.
    """
    candidates = []
    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env:
        candidates.append(tz_env)
    link_key = _zone_from_localtime_link()
    if link_key:
        candidates.append(link_key)

    for key in candidates:
        try:
            return load_zone(key)
        except TimezoneResolutionError:
            logger.debug("Host zone candidate %r not in tz database", key)
    return None


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Resolve a zone name, never failing.

    None, '' and 'local' mean the host zone. An unknown name logs a
    warning and resolves to UTC.

    Returns:
        tzinfo, or None for host local time without a known IANA key
    """
    if not name or name.lower() == "local":
        return local_zone()
    try:
        return load_zone(name)
    except TimezoneResolutionError as e:
        logger.warning("%s; falling back to UTC", e)
        return timezone.utc


def is_within_hours(hour: int, start: int, end: int) -> bool:
    """Check if hour falls in [start, end).

    Supports midnight wrap (e.g. start=22, end=6 means 22:00-06:00).
    """
    if start <= end:
        return start <= hour < end
    return hour >= start or hour < end


def is_us_eastern(zone_key: Optional[str], abbreviation: str) -> bool:
    """Decide whether a zone is US Eastern time.

    A known IANA key is authoritative. Zones without a key (fixed
    offsets, bare host local time) fall back to the abbreviation.
    """
    if zone_key:
        return zone_key in US_EASTERN_ZONES
    return abbreviation in EASTERN_ABBREVIATIONS or "Eastern" in abbreviation


def is_market_open(hour: int, minute: int) -> bool:
    """NYSE regular session, 09:30 to 16:00 local Eastern time."""
    return MARKET_OPEN <= (hour, minute) and hour < MARKET_CLOSE_HOUR


def _to_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        # Naive instants are taken as UTC
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def build(
    now: Optional[datetime] = None,
    tz: TzArg = None,
    business_hours: Tuple[int, int] = DEFAULT_BUSINESS_HOURS,
) -> TemporalContext:
    """Build the temporal context for one instant.

    Args:
        now: Instant to describe; naive values are UTC, None reads the clock once
        tz: tzinfo, zone name, or None for the host zone
        business_hours: (start, end) local hours, end exclusive

    Returns:
        TemporalContext computed from a single snapshot
    """
    utc_instant = _to_utc(now)
    zone = resolve_timezone(tz) if tz is None or isinstance(tz, str) else tz

    # Offset is resolved at the instant itself, so DST days come out right
    local = utc_instant.astimezone(zone)

    abbreviation = local.strftime("%Z") or "UTC"
    zone_key = getattr(zone, "key", None)
    iso_year, week_of_year, day_of_week_num = local.isocalendar()

    start, end = business_hours
    eastern = is_us_eastern(zone_key, abbreviation)

    return TemporalContext(
        utc_instant=utc_instant,
        local_instant=local,
        timezone=zone_key or abbreviation,
        timezone_abbreviation=abbreviation,
        timezone_offset=local.strftime("%z") or "+0000",
        year=local.year,
        month=local.month,
        day=local.day,
        day_of_year=local.timetuple().tm_yday,
        day_of_week=local.strftime("%A"),
        day_of_week_num=day_of_week_num,
        month_name=local.strftime("%B"),
        iso_year=iso_year,
        week_of_year=week_of_year,
        quarter=(local.month - 1) // 3 + 1,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
        is_business_hours=is_within_hours(local.hour, start, end),
        is_weekend=day_of_week_num >= 6,
        is_market_hours=eastern and is_market_open(local.hour, local.minute),
    )


def build_from_config(
    now: Optional[datetime] = None,
    tz: TzArg = None,
    config: Optional[dict] = None,
) -> TemporalContext:
    """Build a context using the user's configured zone and business hours.

    An explicit tz overrides the configured timezone.
    """
    if config is None:
        from .config import get_temporal_config
        config = get_temporal_config()

    if tz is None:
        tz = config.get("timezone")
    return build(
        now=now,
        tz=tz,
        business_hours=config.get("business_hours", DEFAULT_BUSINESS_HOURS),
    )
