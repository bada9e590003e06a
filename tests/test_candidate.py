from discserial.sheet.candidate import (
    NO_CANDIDATE, is_better, on_data_index, on_end_of_sheet,
    on_file_boundary, on_track_boundary
)
from discserial.sheet.structs import PendingCandidate, ResolvedTrack


def test_data_index_opens_candidate_once():
    state = on_data_index(NO_CANDIDATE, 2, 100, 'a.bin')
    assert state == PendingCandidate(offset=100, track=2, path='a.bin')
    # a later INDEX of the same track keeps the original start
    assert on_data_index(state, 2, 500, 'a.bin') is state


def test_track_boundary_same_track_keeps_candidate():
    state = PendingCandidate(offset=100, track=2, path='a.bin')
    assert on_track_boundary(state, 2, 900) == (state, None)


def test_track_boundary_finalizes_candidate():
    state = PendingCandidate(offset=100, track=2, path='a.bin')
    assert on_track_boundary(state, 3, 900) == (NO_CANDIDATE, ResolvedTrack(100, 800, 'a.bin'))


def test_file_boundary_uses_file_size():
    state = PendingCandidate(offset=0, track=1, path='a.bin')
    assert on_file_boundary(state, 4704) == (NO_CANDIDATE, ResolvedTrack(0, 4704, 'a.bin'))


def test_unknown_file_size_drops_candidate():
    state = PendingCandidate(offset=0, track=1, path='missing.bin')
    assert on_file_boundary(state, None) == (NO_CANDIDATE, None)
    assert on_end_of_sheet(state, None) == (NO_CANDIDATE, None)


def test_empty_candidate_is_not_finalized():
    state = PendingCandidate(offset=2352, track=1, path='a.bin')
    assert on_end_of_sheet(state, 2352) == (NO_CANDIDATE, None)


def test_no_candidate_transitions():
    assert on_file_boundary(NO_CANDIDATE, 100) == (NO_CANDIDATE, None)
    assert on_track_boundary(NO_CANDIDATE, 1, 100) == (NO_CANDIDATE, None)
    assert on_end_of_sheet(NO_CANDIDATE, 100) == (NO_CANDIDATE, None)


def test_is_better():
    small = ResolvedTrack(0, 10, 'a.bin')
    large = ResolvedTrack(0, 50, 'b.bin')
    assert is_better(small, None)
    assert is_better(large, small)
    assert not is_better(small, large)
    assert not is_better(ResolvedTrack(0, 50, 'c.bin'), large)
    assert not is_better(None, small)
