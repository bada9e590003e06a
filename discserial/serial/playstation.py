import re
from typing import BinaryIO, Optional, Tuple
from .constants import *
from .utilities import read_at, stream_size

import logging
logger = logging.getLogger(__name__)

_psp_serial = re.compile(b'(?:' + b'|'.join(p.encode('ascii') for p in PSP_PREFIXES) + b')-')


def _sector_layout(stream: BinaryIO, sub_channel_mixed: bool) -> Optional[Tuple[int, int]]:
    size = stream_size(stream)
    if size is None:
        return None

    is_mode1 = False
    if not sub_channel_mixed and size % PS1_FRAME_MODE1 == 0:
        is_mode1 = read_at(stream, 0, 4) != PS1_MODE_TEST

    skip = 0 if is_mode1 else PS1_RAW_SKIP
    if sub_channel_mixed:
        frame_size = PS1_FRAME_SUBCHANNEL
    elif is_mode1:
        frame_size = PS1_FRAME_MODE1
    else:
        frame_size = PS1_FRAME_RAW
    return skip, frame_size


def _extent(record: bytes) -> int:
    return record[2] | (record[3] << 8) | (record[4] << 16)


def _find_system_cnf(directory: bytes) -> Optional[bytes]:
    name_end = PS1_RECORD_NAME_OFFSET + len(PS1_SYSTEM_CNF)

    for sector_start in range(0, len(directory), PS1_SECTOR_USER_DATA):
        sector = directory[sector_start:sector_start + PS1_SECTOR_USER_DATA]
        pos = 0
        while pos < len(sector):
            record_length = sector[pos]
            if record_length == 0:
                break
            record = sector[pos:pos + record_length]
            if len(record) >= name_end and record[PS1_RECORD_NAME_OFFSET:name_end].upper() == PS1_SYSTEM_CNF:
                return record
            pos += record_length
    return None


def parse_boot_line(system_cnf: bytes) -> Optional[str]:
    """
    Turn the BOOT entry of SYSTEM.CNF into a serial,
    e.g. 'BOOT = cdrom:\\SLUS_012.34;1' -> 'SLUS-01234'.
    """
    text = system_cnf.split(b'\x00', 1)[0].decode('ascii', errors='replace')
    start = text.lower().find('boot')
    if start < 0:
        return None

    line = text[start:].split('\n', 1)[0]
    boot_file = re.split(r'[\\:]', line)[-1]

    prefix = boot_file[:4]
    if len(prefix) < 4 or not prefix.isalnum():
        return None

    rest = boot_file[4:]
    if rest and not rest[0].isalnum():
        rest = rest[1:]

    suffix = []
    i = 0
    while i < len(rest) and rest[i].isascii() and rest[i].isalnum():
        suffix.append(rest[i])
        i += 1
        if i < len(rest) and rest[i] == '.':
            i += 1

    if not suffix:
        return None
    return f"{prefix.upper()}-{''.join(suffix)}"


def _detect_ps1_game_sub(stream: BinaryIO, sub_channel_mixed: bool) -> Optional[str]:
    layout = _sector_layout(stream, sub_channel_mixed)
    if layout is None:
        return None
    skip, frame_size = layout

    root = read_at(stream, PS1_ROOT_RECORD_OFFSET + skip + PS1_PVD_SECTOR * frame_size, 6)
    if root is None or len(root) < 5:
        return None
    root_sector = _extent(root)

    directory = b''
    for i in range(PS1_DIRECTORY_SECTORS):
        data = read_at(stream, skip + (root_sector + i) * frame_size, PS1_SECTOR_USER_DATA)
        if data is None:
            break
        directory += data

    record = _find_system_cnf(directory)
    if record is None:
        return None

    system_cnf = read_at(stream, skip + _extent(record) * frame_size, PS1_SYSTEM_CNF_LENGTH)
    if system_cnf is None:
        return None
    return parse_boot_line(system_cnf)


def detect_ps1_game(stream: BinaryIO) -> Optional[str]:
    return _detect_ps1_game_sub(stream, False) or _detect_ps1_game_sub(stream, True)


def detect_psp_game(stream: BinaryIO) -> Optional[str]:
    data = read_at(stream, 0, PSP_SCAN_LIMIT + PSP_SERIAL_LENGTH)
    if data is None:
        return None

    m = _psp_serial.search(data, 0, PSP_SCAN_LIMIT + 4)
    if m is None or m.start() >= PSP_SCAN_LIMIT:
        return None

    serial = data[m.start():m.start() + PSP_SERIAL_LENGTH]
    if len(serial) < PSP_SERIAL_LENGTH:
        return None
    return serial.decode('ascii', errors='replace')
