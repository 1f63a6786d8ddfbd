import logging
from typing import List, TextIO

from cdda.cd_types import FIRST_TRACK_PREGAP, Disc, DiscTrack
from cdda.msf import format_msf

logger = logging.getLogger(__name__)

TRACK_TYPE_AUDIO = "AUDIO"


class CueSheet:
    """Single FILE cue sheet for a raw audio image."""

    def __init__(self, binary_name: str):
        self.binary_name = binary_name
        self.tracks: List[DiscTrack] = []

    @classmethod
    def from_disc(cls, disc: Disc, binary_name: str) -> 'CueSheet':
        cue = cls(binary_name)
        for track in disc.tracks:
            cue.add_track(track)
        return cue

    def add_track(self, track: DiscTrack):
        expected = len(self.tracks) + 1
        if track.sequence != expected:
            raise ValueError(f"Expected track {expected}, got track {track.sequence}")
        self.tracks.append(track)

    def lines(self) -> List[str]:
        lines = [f'FILE "{self.binary_name}" BINARY']
        for track in self.tracks:
            lines.append(f"  TRACK {track.sequence:02d} {TRACK_TYPE_AUDIO}")
            if track.pregap:
                # lead-in is signalled here only, no silence is written to the image
                lines.append(f"    PREGAP {format_msf(FIRST_TRACK_PREGAP)}")
            lines.append(f"    INDEX 01 {format_msf(track.start_sector)}")
        return lines

    def render(self) -> str:
        return "".join(line + "\n" for line in self.lines())

    def export(self, stream: TextIO):
        stream.write(self.render())
        logger.debug(f"Wrote cue sheet with {len(self.tracks)} track(s) for {self.binary_name}")
