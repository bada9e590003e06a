import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MagicEntry:
    offset: int
    system_name: str
    magic: bytes

    @property
    def length(self) -> int:
        return len(self.magic)


# Probed in order, first match wins
MAGIC_NUMBERS = (
    MagicEntry(0x008008, "psp", b"PSP GAME"),
    MagicEntry(0x008008, "ps1", b"PLAYSTATION"),
    MagicEntry(0x00001c, "gc", b"\xc2\x33\x9f\x3d"),
    MagicEntry(0, "scd", b"SEGADISCSYSTEM"),
    MagicEntry(0, "sat", b"SEGA SEGASATURN"),
    MagicEntry(0, "dc", b"SEGA SEGAKATANA"),
    # no dedicated serial reader, the ASCII scanner handles these
    MagicEntry(0x000018, "wii", b"\x5d\x1c\x9e\xa3"),
    MagicEntry(0x800008, "cdi", b"CD-RTOS"),
    MagicEntry(0x000820, "pcecd", b"PC Engine CD-ROM"),
)


def _probe(stream: BinaryIO, entry: MagicEntry) -> bool:
    try:
        if entry.offset < 0:
            stream.seek(entry.offset, os.SEEK_END)
        else:
            stream.seek(entry.offset, os.SEEK_SET)
        data = stream.read(entry.length)
    except OSError as ex:
        logger.debug(f"Skipping {entry.system_name} signature at {entry.offset:#x}: {ex}")
        return False

    return data == entry.magic


def detect_system(stream: BinaryIO, table: Sequence[MagicEntry] = MAGIC_NUMBERS) -> Optional[str]:
    """Return the system whose signature matches first, or None."""
    logger.debug("Comparing with known magic numbers...")
    for entry in table:
        if _probe(stream, entry):
            logger.debug(f"Matched {entry.system_name} signature at offset {entry.offset:#x}")
            return entry.system_name
    return None
