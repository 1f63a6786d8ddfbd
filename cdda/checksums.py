import hashlib
import zlib
from typing import Dict

READ_SIZE = 1024 * 1024


class FileChecksums:
    """CRC32, MD5 and SHA-1 of a file, as listed in a DAT rom entry."""

    def __init__(self):
        self._crc = 0
        self._md5 = hashlib.md5()
        self._sha1 = hashlib.sha1()
        self.size = 0

    def update(self, data: bytes):
        self._crc = zlib.crc32(data, self._crc)
        self._md5.update(data)
        self._sha1.update(data)
        self.size += len(data)

    @property
    def crc(self) -> str:
        return f"{self._crc & 0xFFFFFFFF:08x}"

    @property
    def md5(self) -> str:
        return self._md5.hexdigest()

    @property
    def sha1(self) -> str:
        return self._sha1.hexdigest()

    @classmethod
    def file(cls, filename: str) -> 'FileChecksums':
        context = cls()
        with open(filename, 'rb') as f:
            for block in iter(lambda: f.read(READ_SIZE), b''):
                context.update(block)
        return context

    def as_rom_attributes(self) -> Dict[str, str]:
        return {'@size': str(self.size), '@crc': self.crc, '@md5': self.md5, '@sha1': self.sha1}
