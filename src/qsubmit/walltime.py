"""
Wall-clock time parsing and formatting.

Two formats are handled:

    User requests:     [D-]HH:MM:SS          e.g. 02:00:00, 1-12:00:00
    Slurm limits:      what sinfo prints for a partition's time limit,
                       e.g. infinite, 30:00, 2:00:00, 7-00:00:00

All durations are carried as integer seconds.
"""

import re
from typing import Optional

from .errors import WalltimeFormatError

# Floor for any request, and the value used when a partition allows no more
MIN_WALLTIME = 30 * 60

WALLTIME_PATTERN = re.compile(r'^(?:([0-9]+)-)?([0-9]{2}):([0-5][0-9]):([0-5][0-9])$')

_UNLIMITED = {'infinite', 'unlimited', 'none'}


def parse_walltime(text: str) -> int:
    """
    Parse a user-supplied wall-clock time.

    Args:
        text: Duration in [D-]HH:MM:SS form

    Returns:
        Duration in seconds

    Raises:
        WalltimeFormatError: If text does not match the pattern
    """
    match = WALLTIME_PATTERN.match(text.strip())
    if not match:
        raise WalltimeFormatError(
            f"Invalid time '{text}': expected [D-]HH:MM:SS (e.g. 02:00:00 or 1-00:00:00)"
        )
    days, hours, minutes, seconds = match.groups()
    return ((int(days or 0) * 24 + int(hours)) * 60 + int(minutes)) * 60 + int(seconds)


def parse_slurm_time(text: str) -> Optional[int]:
    """
    Parse a Slurm time limit as printed by sinfo/scontrol.

    Accepted forms: "minutes", "minutes:seconds", "hours:minutes:seconds",
    "days-hours", "days-hours:minutes", "days-hours:minutes:seconds",
    and "infinite"/"UNLIMITED".

    Returns:
        Seconds, or None for an unbounded limit
    """
    text = text.strip()
    if text.lower() in _UNLIMITED:
        return None

    days = 0
    if '-' in text:
        day_str, text = text.split('-', 1)
        try:
            days = int(day_str)
            parts = [int(p) for p in text.split(':')]
        except ValueError:
            raise WalltimeFormatError(f"Unrecognized Slurm time limit: '{day_str}-{text}'")
        # With a day segment the fields are hours[:minutes[:seconds]]
        parts += [0] * (3 - len(parts))
        hours, minutes, seconds = parts[:3]
    else:
        try:
            parts = [int(p) for p in text.split(':')]
        except ValueError:
            raise WalltimeFormatError(f"Unrecognized Slurm time limit: '{text}'")
        if len(parts) == 1:
            hours, minutes, seconds = 0, parts[0], 0
        elif len(parts) == 2:
            hours, minutes, seconds = 0, parts[0], parts[1]
        elif len(parts) == 3:
            hours, minutes, seconds = parts
        else:
            raise WalltimeFormatError(f"Unrecognized Slurm time limit: '{text}'")

    return ((days * 24 + hours) * 60 + minutes) * 60 + seconds


def format_walltime(seconds: int) -> str:
    """Format seconds as [D-]HH:MM:SS, with the day segment only when needed."""
    days, rem = divmod(int(seconds), 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    clock = f"{hours:02d}:{minutes:02d}:{secs:02d}"
    if days:
        return f"{days}-{clock}"
    return clock


def format_limit(seconds: Optional[int]) -> str:
    """Format a partition limit, rendering an unbounded one as 'infinite'."""
    if seconds is None:
        return 'infinite'
    return format_walltime(seconds)
