import io
import logging
import struct
from typing import BinaryIO, Optional, Tuple

from cdda.cd_types import AudioFormat, TrackSource
from cdda.exceptions import DiscIOError, InvalidContainer, MissingChunk, UnsupportedFormat

logger = logging.getLogger(__name__)

'''
RIFF/WAVE walking: locate the fmt and data chunks of a CD audio source
'''

RIFF_MAGIC = b'RIFF'
WAVE_MAGIC = b'WAVE'
FMT_CHUNK = b'fmt '
DATA_CHUNK = b'data'

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
# enough for WAVE_FORMAT_EXTENSIBLE bodies, only the first 16 bytes are used
FMT_READ_LIMIT = 40
FMT_MIN_SIZE = 16


def decode_fmt(body: bytes) -> AudioFormat:
    format_tag, channels, sample_rate = struct.unpack('<HHI', body[0:8])
    bits_per_sample = struct.unpack('<H', body[14:16])[0]
    return AudioFormat(format_tag, channels, sample_rate, bits_per_sample)


def _seek_forward(stream: BinaryIO, name: str, count: int) -> None:
    try:
        stream.seek(count, io.SEEK_CUR)
    except (OSError, ValueError) as err:
        raise DiscIOError(f"seek failed: {err}", name, "read") from err


def _skip_chunk(stream: BinaryIO, name: str, size: int) -> None:
    # chunks are word aligned, odd sizes carry one pad byte
    _seek_forward(stream, name, size + (size & 1))


def read_header(stream: BinaryIO, name: str) -> None:
    header = stream.read(RIFF_HEADER_SIZE)
    if len(header) != RIFF_HEADER_SIZE:
        raise InvalidContainer("cannot read RIFF header", name)
    if header[0:4] != RIFF_MAGIC or header[8:12] != WAVE_MAGIC:
        raise InvalidContainer("not a RIFF/WAVE file", name)


def parse_wave(stream: BinaryIO, name: str) -> Tuple[AudioFormat, TrackSource]:
    """
    Walk the chunks of a WAV stream until both fmt and data have been seen.

    Returns the decoded format and the location of the sample data. Chunks
    following the data chunk are never visited once fmt is known.
    """
    read_header(stream, name)

    audio_format: Optional[AudioFormat] = None
    source: Optional[TrackSource] = None

    while audio_format is None or source is None:
        chunk_header = stream.read(CHUNK_HEADER_SIZE)
        if len(chunk_header) != CHUNK_HEADER_SIZE:
            break
        tag = chunk_header[0:4]
        size = struct.unpack('<I', chunk_header[4:8])[0]
        logger.debug(f"{name}: chunk {tag!r} of {size} bytes")

        if tag == FMT_CHUNK:
            need = min(size, FMT_READ_LIMIT)
            body = stream.read(need)
            if len(body) != need:
                raise DiscIOError("short read in fmt chunk", name, "read")
            if size >= FMT_MIN_SIZE:
                audio_format = decode_fmt(body)
            else:
                logger.debug(f"{name}: fmt chunk of {size} bytes is incomplete, ignoring")
            _seek_forward(stream, name, size - need + (size & 1))
        elif tag == DATA_CHUNK:
            try:
                here = stream.tell()
            except (OSError, ValueError) as err:
                raise DiscIOError(f"cannot locate data chunk: {err}", name, "read") from err
            source = TrackSource(name, here, size)
            _skip_chunk(stream, name, size)
        else:
            _skip_chunk(stream, name, size)

    if audio_format is None or source is None:
        raise MissingChunk("missing fmt or data chunk", name)

    validate_format(audio_format, name)
    logger.debug(f"{name}: {source.data_size} bytes of PCM at offset {source.data_offset}")
    return audio_format, source


def validate_format(audio_format: AudioFormat, name: str) -> None:
    if not audio_format.is_cdda():
        raise UnsupportedFormat(f"must be 44.1kHz, 16-bit, stereo PCM (found {audio_format.describe()})", name)
