import logging
from typing import BinaryIO, Callable, Optional, Sequence, TextIO

from cdda.cd_types import MAX_MSF_SECTOR, Disc
from cdda.cue import CueSheet
from cdda.exceptions import DiscIOError
from cdda.ifilter import WaveFilter
from cdda.msf import format_msf
from cdda.sector_packer import DEFAULT_BUFFER_SIZE, SectorPacker
from cdda.wav import parse_wave

logger = logging.getLogger(__name__)


def pack_tracks(filters: Sequence[WaveFilter], packer: SectorPacker,
                progress: Optional[Callable[[str], None]] = None) -> Disc:
    """
    Parse, validate and pack every input in order.

    The first failure propagates and aborts the run. Each input stream is
    closed before the next one is opened, whatever the outcome.
    """
    disc = Disc()
    for image_filter in filters:
        with image_filter:
            stream = image_filter.get_data_fork_stream()
            logger.debug(f"Opened {image_filter.filename} ({image_filter.length} bytes)")
            _, source = parse_wave(stream, image_filter.path)
            sectors = packer.pack(stream, source)
        track = disc.add_track(source, sectors)
        logger.info(f"Track {track.sequence:02d} starts at sector {track.start_sector} ({format_msf(track.start_sector)})")
        if progress:
            progress(f"Appended {source.name} ({source.data_size} bytes, padded to {track.padded_size})")

    if disc.total_sectors > MAX_MSF_SECTOR:
        logger.warning(f"Disc is {format_msf(disc.total_sectors)} long, timecodes exceed 99 minutes")
    return disc


def write_cue(disc: Disc, cue_stream: TextIO, binary_name: str, cue_name: str) -> CueSheet:
    cue = CueSheet.from_disc(disc, binary_name)
    try:
        cue.export(cue_stream)
    except (OSError, UnicodeError) as err:
        raise DiscIOError(f"write error: {err}", cue_name, "write") from err
    return cue


def make_cdda(input_paths: Sequence[str], bin_stream: BinaryIO, bin_name: str,
              cue_stream: TextIO, cue_name: str, binary_reference: Optional[str] = None,
              buffer_size: int = DEFAULT_BUFFER_SIZE,
              progress: Optional[Callable[[str], None]] = None) -> Disc:
    """
    Build a BIN/CUE pair from WAV files on already opened output streams.

    binary_reference is the name written to the cue FILE line, defaulting
    to bin_name.
    """
    packer = SectorPacker(bin_stream, bin_name, buffer_size)
    filters = [WaveFilter(path) for path in input_paths]
    disc = pack_tracks(filters, packer, progress)
    write_cue(disc, cue_stream, binary_reference or bin_name, cue_name)
    return disc


def convert_files(input_paths: Sequence[str], bin_path: str, cue_path: str,
                  binary_reference: Optional[str] = None,
                  buffer_size: int = DEFAULT_BUFFER_SIZE,
                  progress: Optional[Callable[[str], None]] = None) -> Disc:
    """Open both outputs once for the whole run and convert into them."""
    try:
        bin_stream = open(bin_path, 'wb')
    except OSError as err:
        raise DiscIOError(f"cannot open: {err.strerror}", bin_path, "write") from err
    with bin_stream:
        try:
            cue_stream = open(cue_path, 'w', encoding='utf-8', errors='surrogateescape', newline='\n')
        except OSError as err:
            raise DiscIOError(f"cannot open: {err.strerror}", cue_path, "write") from err
        with cue_stream:
            return make_cdda(input_paths, bin_stream, bin_path, cue_stream, cue_path,
                             binary_reference, buffer_size, progress)
