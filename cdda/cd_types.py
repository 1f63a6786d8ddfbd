from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

from cdda.exceptions import ResourceError

SECTOR_SIZE = 2352
FRAMES_PER_SECOND = 75
SECONDS_PER_MINUTE = 60
SECTORS_PER_MINUTE = FRAMES_PER_SECOND * SECONDS_PER_MINUTE

# 2 second lead-in, only ever written to the cue sheet
FIRST_TRACK_PREGAP = 2 * FRAMES_PER_SECOND

# last address a two digit minute field can express, 99:59:74
MAX_MSF_SECTOR = 100 * SECTORS_PER_MINUTE - 1


class WaveFormatTag(IntEnum):
    Unknown = 0x0000
    Pcm = 0x0001
    Adpcm = 0x0002
    IeeeFloat = 0x0003
    ALaw = 0x0006
    MuLaw = 0x0007
    Extensible = 0xFFFE


def enum_name(enum_class, value) -> str:
    try:
        return enum_class(value).name
    except ValueError:
        return f"0x{value:04X}"


@dataclass(frozen=True)
class AudioFormat:
    format_tag: int = WaveFormatTag.Unknown
    channels: int = 0
    sample_rate: int = 0
    bits_per_sample: int = 0

    def is_cdda(self) -> bool:
        return self == CDDA_FORMAT

    def describe(self) -> str:
        return (f"{enum_name(WaveFormatTag, self.format_tag)}, {self.channels} channel(s), "
                f"{self.sample_rate} Hz, {self.bits_per_sample}-bit")


CDDA_FORMAT = AudioFormat(WaveFormatTag.Pcm, 2, 44100, 16)


@dataclass(frozen=True)
class TrackSource:
    name: str = ""
    data_offset: int = 0
    data_size: int = 0


@dataclass(frozen=True)
class DiscTrack:
    sequence: int = 0
    start_sector: int = 0
    pregap: bool = False
    name: str = ""
    data_size: int = 0
    sectors: int = 0

    @property
    def padded_size(self) -> int:
        return self.sectors * SECTOR_SIZE


@dataclass
class Disc:
    tracks: List[DiscTrack] = field(default_factory=list)
    total_sectors: int = 0

    @property
    def next_sequence(self) -> int:
        return len(self.tracks) + 1

    @property
    def image_size(self) -> int:
        return self.total_sectors * SECTOR_SIZE

    def add_track(self, source: TrackSource, sectors: int) -> DiscTrack:
        """Record a packed track starting at the current end of the disc."""
        track = DiscTrack(
            sequence=self.next_sequence,
            start_sector=self.total_sectors,
            pregap=not self.tracks,
            name=source.name,
            data_size=source.data_size,
            sectors=sectors,
        )
        try:
            self.tracks.append(track)
        except MemoryError as err:
            raise ResourceError("cannot grow the track list", source.name) from err
        self.total_sectors += sectors
        return track
