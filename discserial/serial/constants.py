# PlayStation
PS1_MODE_TEST = b'\x00\xff\xff\xff'
PS1_PVD_SECTOR = 16
PS1_ROOT_RECORD_OFFSET = 156
PS1_DIRECTORY_SECTORS = 2
PS1_RECORD_NAME_OFFSET = 33
PS1_SYSTEM_CNF = b'SYSTEM.CNF;1'
PS1_SYSTEM_CNF_LENGTH = 256
PS1_RAW_SKIP = 24
PS1_SECTOR_USER_DATA = 2048
PS1_FRAME_MODE1 = 2048
PS1_FRAME_RAW = 2352
PS1_FRAME_SUBCHANNEL = 2448

PSP_SCAN_LIMIT = 100000
PSP_SERIAL_LENGTH = 10
PSP_PREFIXES = (
    "ULES", "ULUS", "ULJS",
    "ULEM", "ULUM", "ULJM",
    "UCES", "UCUS", "UCJS", "UCAS", "UCKS",
    "ULKS", "ULAS",
    "NPEH", "NPUH", "NPJH", "NPHH",
    "NPEG", "NPUG", "NPJG", "NPHG",
    "NPEZ", "NPUZ", "NPJZ",
)

# GameCube
GC_SERIAL_LENGTH = 4
GC_REDUMP_PREFIX = "DL-DOL-"
GC_REGIONS = {
    'E': "USA",
    'J': "JPN",
    'P': "EUR",  # also P-UKV, P-AUS
    'X': "EUR",  # also X-UKV, X-EUU
    'Y': "FAH",
    'D': "NOE",
    'S': "ESP",
    'F': "FRA",
    'I': "ITA",
    'H': "HOL",
    'K': "KOR",
}

# Sega
PAL_SUFFIX = "-50"
SCD_SERIAL_OFFSET = 0x183
SCD_SERIAL_LENGTH = 11
SAT_SERIAL_OFFSET = 0x20
SAT_SERIAL_LENGTH = 9
SAT_REGION_OFFSET = 0x40
DC_SERIAL_OFFSET = 0x40
DC_SERIAL_LENGTH = 10

# Generic ASCII serial
ASCII_SCAN_LIMIT = 10000
ASCII_WINDOW = 15
ASCII_FALSE_POSITIVES = (b"WBFS",)
REGEX_ASCII_SERIAL = rb'[A-Z0-9-]{4,8}(?![A-Z0-9-])'
