import logging
import os
from typing import Sequence

import xmltodict

from cdda.checksums import FileChecksums

logger = logging.getLogger(__name__)

'''
Logiqx style datafile describing the files of a generated disc image
'''

DAT_VERSION = '1.0'


def build_dat_dict(name: str, paths: Sequence[str]) -> dict:
    roms = []
    for path in paths:
        rom = {'@name': os.path.basename(path)}
        rom.update(FileChecksums.file(path).as_rom_attributes())
        logger.debug(f"{rom['@name']}: size {rom['@size']} crc {rom['@crc']}")
        roms.append(rom)
    return {'datafile': {
        'header': {
            'name': name,
            'description': f'{name} (CDDA BIN/CUE)',
            'version': DAT_VERSION,
        },
        'game': {
            '@name': name,
            'description': name,
            'rom': roms,
        },
    }}


def create_dat(name: str, paths: Sequence[str], dat_path: str):
    xml_string = xmltodict.unparse(build_dat_dict(name, paths), pretty=True, encoding='utf-8')
    with open(dat_path, 'w', encoding='utf-8') as f:
        f.write(xml_string)
        f.write('\n')
    logger.info(f"Wrote DAT for {len(paths)} file(s) to {dat_path}")
