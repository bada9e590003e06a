import re
from typing import BinaryIO, Optional
from .constants import ASCII_SCAN_LIMIT, ASCII_WINDOW, ASCII_FALSE_POSITIVES, REGEX_ASCII_SERIAL
from .utilities import read_at

_serial_run = re.compile(REGEX_ASCII_SERIAL)


def detect_serial_ascii_game(stream: BinaryIO) -> Optional[str]:
    """
    Check for an ASCII serial near the start of the image (Wii and other
    systems without a dedicated reader): 4 to 8 characters of A-Z, 0-9 and
    '-' starting within the first 10,000 bytes.
    """
    data = read_at(stream, 0, ASCII_SCAN_LIMIT + ASCII_WINDOW)
    if data is None:
        return None

    pos = 0
    while pos < ASCII_SCAN_LIMIT:
        m = _serial_run.search(data, pos)
        if m is None or m.start() >= ASCII_SCAN_LIMIT:
            return None
        # WBFS containers carry their own magic first
        if m.group() in ASCII_FALSE_POSITIVES:
            pos = m.start() + 1
            continue
        return m.group().decode('ascii')
    return None
