from gameframe.features.session.domain.models import GameSession
from gameframe.features.session.service.manager import GameSessionManager
from tests.fakes import ALICE, BOB, ROSTER, window


def test_no_session_by_default():
    manager = GameSessionManager()
    assert manager.current_game_session() is None
    assert manager.recording_cache is None


def test_start_session_snapshots_roster():
    manager = GameSessionManager()
    roster = list(ROSTER)

    session = manager.start_session("t1", "g1", "coach-1", roster)
    roster.append(BOB)

    assert manager.current_game_session() is session
    assert session.roster == (ALICE, BOB)
    assert session.roster_ids == ["p1", "p2"]
    assert len(session.recordings) == 0


def test_end_session_clears_and_new_session_starts_at_zero():
    manager = GameSessionManager()
    first = manager.start_session("t1", "g1", "coach-1", ROSTER)
    first.recordings.add("km-0", "tr-0", "a", window(), [ALICE])
    first.recordings.add("km-1", "tr-1", "b", window(), [BOB])

    ended = manager.end_session()

    assert ended is first
    assert first.recordings.all() == ()
    assert manager.current_game_session() is None

    second = manager.start_session("t1", "g2", "coach-1", ROSTER)
    assert second.recordings is not first.recordings
    assert second.recordings.next_index == 0
    assert second.recordings.add("km-2", "tr-2", "c", window(), [ALICE]).local_index == 0


def test_end_session_without_game():
    assert GameSessionManager().end_session() is None


def test_session_built_elsewhere_gets_its_own_cache():
    session = GameSession(team_id="t1", game_id="g1", uploaded_by="coach-1", roster=tuple(ROSTER))
    assert session.recordings is not None
    assert session.recordings.next_index == 0
