from gameframe.core.common.enums import DeliveryStatus, PipelineStatus
from gameframe.features.ingestion.service.api import build_ingestion_controller
from gameframe.features.ingestion.service.companion import CompanionLink
from gameframe.features.key_moments.data.repository import SqlKeyMomentRepo, SqlTranscriptRepo
from gameframe.features.session.service.manager import GameSessionManager
from tests.fakes import ROSTER, FakeTranscriber, FakeTransport, window


def test_full_game_recording(tmp_path, db_session):
    sessions = GameSessionManager()
    transport = FakeTransport(reachable=True)
    controller = build_ingestion_controller(sessions, transcriber=FakeTranscriber("great shot alice"))
    link = CompanionLink(transport, controller, sessions)

    print("\n📱 Step 1: Companion reports in...")
    link.on_message({"watchAppVersion": "1.2.0"})
    assert link.can_record and link.is_app_version_valid

    print("🏀 Step 2: Starting game...")
    session = sessions.start_session("t1", "g1", "coach-1", ROSTER)
    assert link.notify_game_started(session.game_id) == DeliveryStatus.SENT
    assert link.on_request({"requestState": True}) == {"gameRecordingOn": True}

    print("🎙️ Step 3: Receiving clips...")
    clip = tmp_path / "watch-clip.m4a"
    clip.write_bytes(b"FAKE_AUDIO")
    first = link.on_file(clip, {
        "recording_start_time": window(0).start.isoformat(),
        "recording_end_time": window(0).end.isoformat(),
    })
    second = link.on_message({
        "recording_start_time": window(30).start.isoformat(),
        "recording_end_time": window(30).end.isoformat(),
        "test_transcript": "everyone back on defense",
    })

    assert first.status == PipelineStatus.CACHED
    assert second.status == PipelineStatus.CACHED
    entries = sessions.recording_cache.all()
    assert [e.local_index for e in entries] == [0, 1]
    assert [m.player_id for m in entries[0].feedback_for] == ["p1"]
    assert [m.player_id for m in entries[1].feedback_for] == ["p1", "p2"]

    print("🏁 Step 4: Ending game...")
    transport.reachable = False
    assert link.notify_game_ended() == DeliveryStatus.QUEUED
    assert transport.queued == [{"gameRecordingOn": False}]
    ended = sessions.end_session()
    assert ended.game_id == "g1"
    assert link.on_request({"requestState": True}) == {"gameRecordingOn": False}

    print("🔍 Step 5: Reading back stored moments...")
    stored = SqlKeyMomentRepo().list_for_game("g1")
    assert [km.id for km in stored] == [first.key_moment_id, second.key_moment_id]
    assert stored[1].audio_path is None
    for km in stored:
        assert SqlTranscriptRepo().get_for_key_moment(km.id) is not None

    # A clip arriving after the game is dropped
    late = link.on_message({
        "recording_start_time": window(90).start.isoformat(),
        "recording_end_time": window(90).end.isoformat(),
        "test_transcript": "bob",
    })
    assert late.status == PipelineStatus.SKIPPED
    assert len(SqlKeyMomentRepo().list_for_game("g1")) == 2
