from typing import BinaryIO, Optional
from .constants import GC_REDUMP_PREFIX, GC_REGIONS, GC_SERIAL_LENGTH
from .utilities import read_at

import logging
logger = logging.getLogger(__name__)


def detect_gc_game(stream: BinaryIO) -> Optional[str]:
    """
    Convert the raw GameCube game code to a redump serial, DL-DOL-XXXX-REG.

    Multi disc titles and the European sub-regions (P-UKV, P-AUS, X-UKV,
    X-EUU) do not match redump.
    """
    raw = read_at(stream, 0, GC_SERIAL_LENGTH)
    if raw is None or len(raw) < GC_SERIAL_LENGTH:
        return None

    try:
        raw_game_id = raw.decode('ascii')
    except UnicodeDecodeError:
        return None

    region = GC_REGIONS.get(raw_game_id[-1])
    if region is None:
        logger.debug(f"Unknown GameCube region code '{raw_game_id[-1]}'")
        return None
    return f"{GC_REDUMP_PREFIX}{raw_game_id}-{region}"
