#!/usr/bin/env python3
"""Tests for sector alignment and the disc accumulator."""

import io
import os
import sys
import unittest
from unittest.mock import Mock, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from cdda.cd_types import SECTOR_SIZE, Disc, TrackSource
from cdda.exceptions import DiscIOError, ResourceError
from cdda.sector_packer import SectorPacker, padding_for, sectors_for
from wave_builder import pattern


class ShortWriter(io.RawIOBase):
    """Accepts at most `limit` bytes per write call."""

    def __init__(self, limit):
        self.limit = limit

    def writable(self):
        return True

    def write(self, b):
        return min(len(b), self.limit)


class FailingWriter(io.RawIOBase):

    def writable(self):
        return True

    def write(self, b):
        raise OSError(28, 'No space left on device')


class TestPadding(unittest.TestCase):

    def test_padding_values(self):
        self.assertEqual(padding_for(0), 0)
        self.assertEqual(padding_for(1), SECTOR_SIZE - 1)
        self.assertEqual(padding_for(SECTOR_SIZE), 0)
        self.assertEqual(padding_for(4096), 2 * SECTOR_SIZE - 4096)

    def test_sectors_round_up(self):
        self.assertEqual(sectors_for(0), 0)
        self.assertEqual(sectors_for(1), 1)
        self.assertEqual(sectors_for(SECTOR_SIZE), 1)
        self.assertEqual(sectors_for(SECTOR_SIZE + 1), 2)
        self.assertEqual(sectors_for(4096), 2)


class TestSectorPacker(unittest.TestCase):

    def setUp(self):
        self.output = io.BytesIO()

    def pack(self, samples, offset=0, buffer_size=8192, size=None):
        stream = io.BytesIO(b'\xEE' * offset + samples + b'\xDD' * 9)
        source = TrackSource('in.wav', offset, len(samples) if size is None else size)
        packer = SectorPacker(self.output, 'out.bin', buffer_size)
        return packer.pack(stream, source)

    def test_copies_data_and_pads_with_zeros(self):
        samples = pattern(4096)
        sectors = self.pack(samples, offset=44)
        self.assertEqual(sectors, 2)
        image = self.output.getvalue()
        self.assertEqual(len(image), 2 * SECTOR_SIZE)
        self.assertEqual(image[:4096], samples)
        self.assertEqual(image[4096:], bytes(2 * SECTOR_SIZE - 4096))

    def test_exact_sector_needs_no_padding(self):
        samples = pattern(SECTOR_SIZE, seed=3)
        self.assertEqual(self.pack(samples), 1)
        self.assertEqual(self.output.getvalue(), samples)

    def test_zero_length_contributes_nothing(self):
        self.assertEqual(self.pack(b'', offset=44), 0)
        self.assertEqual(self.output.getvalue(), b'')

    def test_small_buffer_copies_in_chunks(self):
        samples = pattern(5000, seed=7)
        self.assertEqual(self.pack(samples, offset=10, buffer_size=7), 3)
        image = self.output.getvalue()
        self.assertEqual(image[:5000], samples)
        self.assertEqual(len(image), 3 * SECTOR_SIZE)
        self.assertEqual(image.count(0, 5000), 3 * SECTOR_SIZE - 5000)

    def test_short_read_is_fatal(self):
        with self.assertRaises(DiscIOError) as ctx:
            self.pack(pattern(100), size=1000)
        self.assertEqual(ctx.exception.direction, 'read')
        self.assertEqual(ctx.exception.name, 'in.wav')

    def test_short_write_is_fatal(self):
        packer = SectorPacker(ShortWriter(3), 'out.bin')
        with self.assertRaises(DiscIOError) as ctx:
            packer.pack(io.BytesIO(pattern(16)), TrackSource('in.wav', 0, 16))
        self.assertEqual(ctx.exception.direction, 'write')
        self.assertEqual(ctx.exception.name, 'out.bin')

    def test_write_error_is_fatal(self):
        packer = SectorPacker(FailingWriter(), 'out.bin')
        with self.assertRaises(DiscIOError):
            packer.pack(io.BytesIO(pattern(16)), TrackSource('in.wav', 0, 16))

    def test_rejects_non_positive_buffer(self):
        with self.assertRaises(ValueError):
            SectorPacker(self.output, 'out.bin', 0)

    def test_unallocatable_buffer_is_resource_error(self):
        with patch('cdda.sector_packer.bytes', side_effect=MemoryError, create=True):
            with self.assertRaises(ResourceError) as ctx:
                SectorPacker(self.output, 'out.bin', 2 ** 52)
        self.assertEqual(ctx.exception.name, 'out.bin')
        self.assertEqual(ctx.exception.stage, 'bookkeeping')

    def test_read_allocation_failure_is_resource_error(self):
        stream = Mock()
        stream.read.side_effect = MemoryError
        packer = SectorPacker(self.output, 'out.bin')
        with self.assertRaises(ResourceError):
            packer.pack(stream, TrackSource('in.wav', 0, 16))
        self.assertEqual(self.output.getvalue(), b'')


class TestDiscAccumulator(unittest.TestCase):

    def test_start_sectors_follow_padded_lengths(self):
        output = io.BytesIO()
        packer = SectorPacker(output, 'out.bin')
        disc = Disc()
        for index, size in enumerate((4096, 0, 2352, 1)):
            source = TrackSource(f'{index}.wav', 0, size)
            disc.add_track(source, packer.pack(io.BytesIO(pattern(size)), source))

        self.assertEqual([t.start_sector for t in disc.tracks], [0, 2, 2, 3])
        self.assertEqual([t.sequence for t in disc.tracks], [1, 2, 3, 4])
        self.assertEqual([t.pregap for t in disc.tracks], [True, False, False, False])
        self.assertEqual(disc.total_sectors, 4)
        self.assertEqual(len(output.getvalue()), disc.image_size)
        self.assertEqual(len(output.getvalue()) % SECTOR_SIZE, 0)

    def test_track_records_padded_size(self):
        disc = Disc()
        track = disc.add_track(TrackSource('a.wav', 44, 4096), 2)
        self.assertEqual(track.padded_size, 4704)
        self.assertEqual(track.data_size, 4096)


if __name__ == '__main__':
    unittest.main()
