import io
import logging
from typing import BinaryIO

from cdda.cd_types import SECTOR_SIZE, TrackSource
from cdda.exceptions import DiscIOError, ResourceError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 8192


def padding_for(data_size: int) -> int:
    return (SECTOR_SIZE - (data_size % SECTOR_SIZE)) % SECTOR_SIZE


def sectors_for(data_size: int) -> int:
    return (data_size + padding_for(data_size)) // SECTOR_SIZE


class SectorPacker:
    """
    Appends track sample data to a raw CDDA image.

    Each track is copied verbatim and zero padded up to the next 2352 byte
    boundary, so every track starts on a sector of its own.
    """

    def __init__(self, output: BinaryIO, output_name: str, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError(f"Buffer size must be positive, got {buffer_size}")
        self._output = output
        self._output_name = output_name
        self._buffer_size = buffer_size
        try:
            self._zeros = bytes(buffer_size)
        except MemoryError as err:
            raise ResourceError(f"cannot allocate a {buffer_size} byte copy buffer", output_name) from err

    def pack(self, stream: BinaryIO, source: TrackSource) -> int:
        """Copy one track and its padding, returning the sectors it occupies."""
        try:
            stream.seek(source.data_offset, io.SEEK_SET)
        except (OSError, ValueError) as err:
            raise DiscIOError(f"seek failed: {err}", source.name, "read") from err

        remaining = source.data_size
        while remaining > 0:
            chunk = min(remaining, self._buffer_size)
            try:
                buf = stream.read(chunk)
            except OSError as err:
                raise DiscIOError(f"read error: {err}", source.name, "read") from err
            except MemoryError as err:
                raise ResourceError(f"cannot allocate a {chunk} byte read buffer", self._output_name) from err
            if len(buf) != chunk:
                raise DiscIOError("short read", source.name, "read")
            self._write(buf, "write error")
            remaining -= chunk

        pad_bytes = padding_for(source.data_size)
        logger.debug(f"{source.name}: {source.data_size} bytes, {pad_bytes} bytes of padding")
        while pad_bytes > 0:
            chunk = min(pad_bytes, self._buffer_size)
            self._write(self._zeros[:chunk], "write error (padding)")
            pad_bytes -= chunk

        return sectors_for(source.data_size)

    def _write(self, buf: bytes, message: str) -> None:
        try:
            written = self._output.write(buf)
        except OSError as err:
            raise DiscIOError(f"{message}: {err}", self._output_name, "write") from err
        # raw unbuffered streams may accept less than asked
        if written is not None and written != len(buf):
            raise DiscIOError(message, self._output_name, "write")
