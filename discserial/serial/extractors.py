from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, Tuple
from .playstation import detect_ps1_game, detect_psp_game
from .nintendo import detect_gc_game
from .sega import detect_scd_game, detect_sat_game, detect_dc_game
from .ascii import detect_serial_ascii_game

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerialExtractor:
    system: str
    try_extract: Callable[[BinaryIO], Optional[str]]
    # run even when no signature matched; only readers that confirm the
    # layout they parse qualify
    probe_unknown: bool = False


EXTRACTORS: Tuple[SerialExtractor, ...] = (
    SerialExtractor("ps1", detect_ps1_game, probe_unknown=True),
    SerialExtractor("psp", detect_psp_game),
    SerialExtractor("gc", detect_gc_game),
    SerialExtractor("scd", detect_scd_game),
    SerialExtractor("sat", detect_sat_game),
    SerialExtractor("dc", detect_dc_game),
)

ASCII_EXTRACTOR = SerialExtractor("ascii", detect_serial_ascii_game)


def get_extractor(system: str) -> Optional[SerialExtractor]:
    return next((e for e in EXTRACTORS if e.system == system), None)


def extract_serial(stream: BinaryIO, system: Optional[str] = None,
                   fallback: bool = True) -> Tuple[Optional[str], Optional[str]]:
    """
    Try the reader of the detected system, or the self-checking readers when
    no system is known, and finally the ASCII scanner. Readers that take a
    fixed header field at face value only run after a signature match.

    :return: (serial, name of the extractor that produced it)
    """
    if system is not None:
        order = [e for e in (get_extractor(system),) if e]
    else:
        order = [e for e in EXTRACTORS if e.probe_unknown]
    if fallback:
        order.append(ASCII_EXTRACTOR)

    for extractor in order:
        serial = extractor.try_extract(stream)
        if serial:
            logger.debug(f"{extractor.system} reader found serial '{serial}'")
            return serial, extractor.system
        logger.debug(f"{extractor.system} reader found no serial")
    return None, None
