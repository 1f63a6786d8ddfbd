#!/usr/bin/env python3

""" mkcdda.py: Convert 44.1kHz 16-bit stereo WAV files into a CDDA BIN/CUE
image, one track per input file.
"""
import argparse
import glob
import logging
import os
import sys

import inquirer

from cdda.conversion import convert_files
from cdda.dat import create_dat
from cdda.exceptions import ConversionError
from cdda.settings import load_settings

__version__ = '.1'

logger = logging.getLogger('mkcdda')


def parse_arguments(argv, settings):
    parser = argparse.ArgumentParser(
        prog='mkcdda',
        description='Minimalist WAV to CDDA (BIN/CUE) converter',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s track01.wav track02.wav
  %(prog)s -o album.bin -c album.cue --dat album.dat *.wav

Environment Variables:
  MKCDDA_BIN            - Default binary image name
  MKCDDA_CUE            - Default cue sheet name
  MKCDDA_BUFFER_SIZE    - Copy buffer size in bytes
  MKCDDA_INPUT_PATTERN  - Inputs used when none are given
"""
    )
    parser.add_argument('inputs', nargs='*', help='WAV files, one per track, in track order')
    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--bin', '-o', dest='bin_name', default=settings['bin_name'],
                        help=f"binary image to write (default: {settings['bin_name']})")
    parser.add_argument('--cue', '-c', dest='cue_name', default=settings['cue_name'],
                        help=f"cue sheet to write (default: {settings['cue_name']})")
    parser.add_argument('--dat', default=None, help='also write a DAT with sizes and hashes of the outputs')
    parser.add_argument('--buffer-size', dest='buffer_size', type=int, default=settings['buffer_size'],
                        help=f"copy buffer size in bytes (default: {settings['buffer_size']})")
    parser.add_argument('--force', '-f', action='store_true', help='overwrite existing outputs without asking')
    xgroup = parser.add_mutually_exclusive_group()
    xgroup.add_argument('--quiet', '-q', dest='logging_level', action='store_const', const=logging.ERROR,
                        default=logging.WARNING, help='quiet mode')
    xgroup.add_argument('--verbose', '-v', dest='logging_level', action='store_const', const=logging.INFO,
                        help='verbose mode')
    xgroup.add_argument('--debug', '-d', dest='logging_level', action='store_const', const=logging.DEBUG,
                        help='debug mode')
    args = parser.parse_args(argv)
    if args.buffer_size <= 0:
        parser.error('--buffer-size must be positive')
    return parser, args


def confirm_overwrite(paths, force):
    '''
    returns True when every existing output may be replaced
    '''
    existing = [path for path in paths if path and os.path.exists(path)]
    if not existing or force:
        return True
    if not sys.stdin.isatty():
        logger.error(f"{', '.join(existing)} already exists, use --force to overwrite")
        return False
    for path in existing:
        if not inquirer.confirm(f'{path} already exists, overwrite?', default=False):
            return False
    return True


def cue_binary_reference(bin_path, cue_path):
    # the FILE line is resolved relative to the cue sheet's own directory
    bin_path = os.path.abspath(bin_path)
    try:
        reference = os.path.relpath(bin_path, os.path.dirname(os.path.abspath(cue_path)))
    except ValueError:
        # different drives on Windows
        reference = bin_path
    return reference.replace(os.sep, '/')


def main(argv=None):
    try:
        settings = load_settings()
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    parser, args = parse_arguments(argv, settings)
    logging.basicConfig(level=args.logging_level, format='%(levelname)s: %(message)s')

    inputs = args.inputs or sorted(glob.glob(settings['input_pattern']))
    if not inputs:
        print(f"No {settings['input_pattern']} files found (pass them as arguments).", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    if not confirm_overwrite([args.bin_name, args.cue_name, args.dat], args.force):
        return 1

    try:
        disc = convert_files(inputs, args.bin_name, args.cue_name,
                             binary_reference=cue_binary_reference(args.bin_name, args.cue_name),
                             buffer_size=args.buffer_size, progress=print)
        if args.dat:
            name = os.path.splitext(os.path.basename(args.cue_name))[0]
            create_dat(name, [args.bin_name, args.cue_name], args.dat)
    except ConversionError as err:
        logger.error(f"{err} [{err.stage}, {err.error_number.name}]")
        return 1
    except OSError as err:
        logger.error(f"{err.filename or ''}: {err.strerror or err}")
        return 1

    print(f"Done! Created {args.bin_name} and {args.cue_name} with {len(disc.tracks)} track(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
