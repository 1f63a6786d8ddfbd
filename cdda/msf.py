from typing import Tuple

from cdda.cd_types import FRAMES_PER_SECOND, SECONDS_PER_MINUTE, SECTORS_PER_MINUTE


def sector_to_msf(sector: int) -> Tuple[int, int, int]:
    if sector < 0:
        raise ValueError(f"Sector count cannot be negative: {sector}")
    return (sector // SECTORS_PER_MINUTE, (sector // FRAMES_PER_SECOND) % SECONDS_PER_MINUTE, sector % FRAMES_PER_SECOND)


def number_to_str_msf(number: int) -> str:
    return f"{number:02d}"


def format_msf(sector: int) -> str:
    """MM:SS:FF for a sector count. Minutes past 99 get more digits."""
    return ":".join(number_to_str_msf(part) for part in sector_to_msf(sector))
