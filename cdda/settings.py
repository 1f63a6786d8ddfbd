import logging
import os
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    'bin_name': 'disc.bin',
    'cue_name': 'disc.cue',
    'buffer_size': 8192,
    'input_pattern': 'track*.wav',
}

# environment variable -> settings key
ENVIRONMENT_KEYS = {
    'MKCDDA_BIN': 'bin_name',
    'MKCDDA_CUE': 'cue_name',
    'MKCDDA_BUFFER_SIZE': 'buffer_size',
    'MKCDDA_INPUT_PATTERN': 'input_pattern',
}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict:
    '''
    returns a fresh settings dict, defaults overlaid with any MKCDDA_*
    environment variables
    '''
    if environ is None:
        environ = os.environ
    settings = dict(DEFAULT_SETTINGS)
    for env_name, key in ENVIRONMENT_KEYS.items():
        value = environ.get(env_name)
        if value is None or value == '':
            continue
        if isinstance(DEFAULT_SETTINGS[key], int):
            try:
                value = int(value)
            except ValueError:
                raise ValueError(f"{env_name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{env_name} must be positive, got {value}")
        logger.debug(f"{key} set to {value!r} from {env_name}")
        settings[key] = value
    return settings
