import os
from typing import BinaryIO, Optional

from cdda.exceptions import DiscIOError


class WaveFilter:
    """Read-only access to one input WAV file, scoped to a single track."""

    def __init__(self, path: str):
        self._path = path
        self._stream: Optional[BinaryIO] = None

    @property
    def filename(self) -> str:
        return os.path.basename(self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def length(self) -> int:
        return os.path.getsize(self._path)

    def get_data_fork_stream(self) -> BinaryIO:
        if not self._stream or self._stream.closed:
            try:
                self._stream = open(self._path, 'rb')
            except OSError as err:
                raise DiscIOError(f"cannot open: {err.strerror}", self._path, "read") from err
        return self._stream

    def close(self):
        if self._stream:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> 'WaveFilter':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
