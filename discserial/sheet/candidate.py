"""
Candidate tracking for CUE sheets.

A data track's extent is only known once the next boundary is seen, so the
parser keeps at most one pending candidate and finalizes it on a boundary
event. Each transition is a pure function returning the next state and the
track it finalized, if any.
"""
from typing import Optional, Tuple
from .structs import CandidateState, NoCandidate, PendingCandidate, ResolvedTrack

Transition = Tuple[CandidateState, Optional[ResolvedTrack]]

NO_CANDIDATE = NoCandidate()


def _finalize(state: CandidateState, end: Optional[int]) -> Transition:
    if not isinstance(state, PendingCandidate) or end is None:
        return NO_CANDIDATE, None

    size = end - state.offset
    if size <= 0:
        return NO_CANDIDATE, None
    return NO_CANDIDATE, ResolvedTrack(offset=state.offset, size=size, path=state.path)


def on_data_index(state: CandidateState, track: int, offset: int, path: str) -> CandidateState:
    """First usable INDEX of a data track opens a candidate if none is pending."""
    if isinstance(state, PendingCandidate):
        return state
    return PendingCandidate(offset=offset, track=track, path=path)


def on_file_boundary(state: CandidateState, file_size: Optional[int]) -> Transition:
    """A new FILE ends the previous file; its size is the candidate's end."""
    return _finalize(state, file_size)


def on_track_boundary(state: CandidateState, track: int, position: int) -> Transition:
    """An INDEX of a different track ends the candidate at that INDEX."""
    if isinstance(state, PendingCandidate) and state.track != track:
        return _finalize(state, position)
    return state, None


def on_end_of_sheet(state: CandidateState, file_size: Optional[int]) -> Transition:
    return _finalize(state, file_size)


def is_better(finalized: Optional[ResolvedTrack], best: Optional[ResolvedTrack]) -> bool:
    if finalized is None:
        return False
    return best is None or finalized.size > best.size
