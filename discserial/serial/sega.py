from typing import BinaryIO, Optional
from .constants import *
from .utilities import (
    read_at, header_text, remove_spaces, trim_spaces, collapse_spaces, spaces_to
)

import logging
logger = logging.getLogger(__name__)


def scd_serial(pre_game_id: str) -> Optional[str]:
    if pre_game_id.startswith(("T-", "G-")):
        index = pre_game_id.rfind('-')
        # a lone prefix hyphen leaves nothing to cut
        return pre_game_id[:index] if index > 1 else pre_game_id

    if pre_game_id.startswith("MK-"):
        serial = pre_game_id[3:7]
        if pre_game_id.endswith("50"):
            return serial + PAL_SUFFIX
        return serial

    return None


def detect_scd_game(stream: BinaryIO) -> Optional[str]:
    """Sega CD / Mega-CD serial from the system header at 0x183."""
    raw = read_at(stream, SCD_SERIAL_OFFSET, SCD_SERIAL_LENGTH)
    if raw is None:
        return None

    pre_game_id = remove_spaces(header_text(raw))
    return scd_serial(pre_game_id) or None


def sat_serial(raw_game_id: str, region_id: str) -> Optional[str]:
    if region_id == 'U':
        if raw_game_id.startswith("MK-"):
            return raw_game_id[3:]
        return raw_game_id
    if region_id == 'E':
        return raw_game_id + PAL_SUFFIX
    if region_id == 'J':
        return raw_game_id
    return None


def detect_sat_game(stream: BinaryIO) -> Optional[str]:
    """Saturn serial at 0x20, with the first region code at 0x40."""
    raw = read_at(stream, SAT_SERIAL_OFFSET, SAT_SERIAL_LENGTH)
    if raw is None:
        return None

    raw_region_id = read_at(stream, SAT_REGION_OFFSET, 1)
    if raw_region_id is None:
        return None

    raw_game_id = trim_spaces(header_text(raw))
    if not raw_game_id:
        return None
    return sat_serial(raw_game_id, chr(raw_region_id[0])) or None


def dc_serial(raw_game_id: str) -> Optional[str]:
    length = len(raw_game_id)
    total_hyphens = raw_game_id.count('-')

    if raw_game_id.startswith("T-"):
        if total_hyphens >= 2 or length <= 7:
            return raw_game_id
        return raw_game_id[:7] + '-' + raw_game_id[length - 2:]

    if raw_game_id.startswith("T"):
        pre_game_id = "T-" + raw_game_id[1:]
        if pre_game_id.count('-') >= 2:
            index = pre_game_id.rfind('-')
            return pre_game_id[:index] + '-' + pre_game_id[-2:]

        length_recalc = len(pre_game_id) - 1
        if length_recalc <= 8:
            return pre_game_id[:9]
        return pre_game_id[:7] + '-' + pre_game_id[length_recalc - 2:]

    if raw_game_id.startswith("HDR-"):
        if total_hyphens >= 2:
            index = raw_game_id.rfind('-')
            return raw_game_id[:max(index - 1, 0)] + '-' + raw_game_id[max(length - 4, 0):]
        return raw_game_id

    if raw_game_id.startswith("MK-"):
        if length <= 8:
            return raw_game_id
        return raw_game_id[:8] + '-' + raw_game_id[length - 2:]

    return None


def detect_dc_game(stream: BinaryIO) -> Optional[str]:
    """
    Dreamcast product number at 0x40. Internal spaces become single hyphens
    before the prefix specific redump rules are applied.
    """
    raw = read_at(stream, DC_SERIAL_OFFSET, DC_SERIAL_LENGTH)
    if raw is None:
        return None

    raw_game_id = spaces_to(collapse_spaces(trim_spaces(header_text(raw))), '-')
    if not raw_game_id:
        return None
    return dc_serial(raw_game_id)
