# Tokens
MAX_TOKEN_LEN = 255
WHITESPACE = b' \t\r\n'
QUOTE = b'"'

# CUE keywords, compared case-insensitively
CUE_FILE = "FILE"
CUE_TRACK = "TRACK"
CUE_INDEX = "INDEX"
CUE_TRACK_TYPE_AUDIO = "AUDIO"

# Red Book timing
FRAMES_PER_SECOND = 75
SECONDS_PER_MINUTE = 60

SECTOR_SIZE_MODE1 = 2048
SECTOR_SIZE_MODE2 = 2336
SECTOR_SIZE_RAW = 2352
SECTOR_SIZE_RAW_SUBCHANNEL = 2448

# Bytes per frame stored in the image for each CUE track mode
CUE_SECTOR_SIZES = {
    "AUDIO": SECTOR_SIZE_RAW,
    "CDG": SECTOR_SIZE_RAW_SUBCHANNEL,
    "MODE1/2048": SECTOR_SIZE_MODE1,
    "MODE1/2352": SECTOR_SIZE_RAW,
    "MODE2/2048": SECTOR_SIZE_MODE1,
    "MODE2/2324": 2324,
    "MODE2/2336": SECTOR_SIZE_MODE2,
    "MODE2/2352": SECTOR_SIZE_RAW,
    "CDI/2336": SECTOR_SIZE_MODE2,
    "CDI/2352": SECTOR_SIZE_RAW,
}

# GDI: mode 0 with raw sectors is the audio track signature
GDI_AUDIO_MODE = 0
GDI_AUDIO_SECTOR_SIZE = SECTOR_SIZE_RAW

# Regular expressions
REGEX_MSF = r'^(?P<min>\d{1,3}):(?P<sec>\d{1,2}):(?P<frame>\d{1,2})$'
