from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class ResolvedTrack:
    offset: int = 0
    size: int = 0
    path: str = ""


@dataclass(frozen=True)
class NoCandidate:
    pass


@dataclass(frozen=True)
class PendingCandidate:
    offset: int
    track: int
    path: str


CandidateState = Union[NoCandidate, PendingCandidate]


@dataclass
class CueCursor:
    """Position bookkeeping for the FILE currently being walked."""
    path: str = ""
    file_size: Optional[int] = None
    track: int = 0
    is_data: bool = False
    sector_size: int = 0
    last_frames: int = 0
    last_offset: int = 0
    last_sector_size: int = 0
