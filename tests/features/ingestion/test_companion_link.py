import time
import pytest
from gameframe.core.common.enums import DeliveryStatus, PipelineStatus
from gameframe.features.ingestion.service.companion import CompanionLink, is_version_at_least
from gameframe.features.ingestion.service.controller import RecordingIngestionController
from gameframe.features.key_moments.service.writer import KeyMomentWriter
from gameframe.features.session.service.manager import GameSessionManager
from gameframe.features.storage.data.local_fs import LocalClipInbox
from tests.fakes import ROSTER, FakeRecordStore, FakeTranscriber, FakeTransport, window


@pytest.fixture
def sessions():
    return GameSessionManager()


@pytest.fixture
def store():
    return FakeRecordStore()


def make_link(transport, sessions, store, tmp_path, interval=0.05):
    controller = RecordingIngestionController(
        session_provider=sessions,
        transcriber=FakeTranscriber(),
        writer=KeyMomentWriter(store, store),
        clip_inbox=LocalClipInbox(tmp_path / "inbox")
    )
    return CompanionLink(transport, controller, sessions, min_app_version="1.2.0", heartbeat_interval=interval)


@pytest.mark.parametrize("version, expected", [
    ("1.2.0", True),
    ("1.2", True),
    ("1.10.0", True),
    ("2.0.0", True),
    ("1.1.9", False),
    ("1.2.0-beta", False),
    ("", False),
    (None, False),
])
def test_version_check(version, expected):
    assert is_version_at_least(version, "1.2.0") is expected


def test_can_record_needs_pairing_and_app(sessions, store, tmp_path):
    assert make_link(FakeTransport(), sessions, store, tmp_path).can_record
    assert not make_link(FakeTransport(paired=False), sessions, store, tmp_path).can_record
    assert not make_link(FakeTransport(installed=False), sessions, store, tmp_path).can_record


def test_send_or_queue(sessions, store, tmp_path):
    online = FakeTransport(reachable=True)
    offline = FakeTransport(reachable=False)
    flaky = FakeTransport(reachable=True, send_error=ConnectionError("dropped"))

    assert make_link(online, sessions, store, tmp_path).send_or_queue({"a": 1}) == DeliveryStatus.SENT
    assert make_link(offline, sessions, store, tmp_path).send_or_queue({"a": 1}) == DeliveryStatus.QUEUED
    assert make_link(flaky, sessions, store, tmp_path).send_or_queue({"a": 1}) == DeliveryStatus.QUEUED

    assert online.sent == [{"a": 1}] and online.queued == []
    assert offline.sent == [] and offline.queued == [{"a": 1}]
    assert flaky.queued == [{"a": 1}]


def test_game_start_and_end_notifications(sessions, store, tmp_path):
    transport = FakeTransport(reachable=True)
    link = make_link(transport, sessions, store, tmp_path)

    link.notify_game_started("g1")
    transport.reachable = False
    link.notify_game_ended()

    assert transport.sent == [{"gameRecordingOn": True}]
    assert transport.queued == [{"gameRecordingOn": False}]


def test_request_state_reply(sessions, store, tmp_path):
    link = make_link(FakeTransport(), sessions, store, tmp_path)

    assert link.on_request({"requestState": True}) == {"gameRecordingOn": False}
    sessions.start_session("t1", "g1", "coach-1", ROSTER)
    assert link.on_request({"requestState": True}) == {"gameRecordingOn": True}
    assert link.on_request({"somethingElse": 1}) == {}


def test_messages_are_routed(sessions, store, tmp_path):
    sessions.start_session("t1", "g1", "coach-1", ROSTER)
    link = make_link(FakeTransport(), sessions, store, tmp_path)
    w = window()

    assert link.on_message({"watchAppVersion": "1.3.1"}) is None
    assert link.app_version == "1.3.1"
    assert link.is_app_version_valid

    outcome = link.on_message({
        "recording_start_time": w.start.isoformat(),
        "recording_end_time": w.end.isoformat(),
        "test_transcript": "nice pass bob",
    })
    assert outcome.status == PipelineStatus.CACHED
    assert store.key_moments[outcome.key_moment_id]["feedback_for"] == ["p2"]


def test_files_are_routed(sessions, store, tmp_path):
    sessions.start_session("t1", "g1", "coach-1", ROSTER)
    link = make_link(FakeTransport(), sessions, store, tmp_path)
    clip = tmp_path / "incoming.m4a"
    clip.write_bytes(b"FAKE_AUDIO")

    outcome = link.on_file(clip, {"recording_start_time": window().start})

    assert outcome.succeeded
    assert len(sessions.recording_cache) == 1


def test_heartbeat_skipped_while_unreachable(sessions, store, tmp_path):
    transport = FakeTransport(reachable=False)
    link = make_link(transport, sessions, store, tmp_path)

    assert link.send_heartbeat() is False
    transport.reachable = True
    assert link.send_heartbeat() is True
    assert transport.sent == [{"heartbeat": True}]
    assert transport.queued == []


def test_heartbeat_thread_lifecycle(sessions, store, tmp_path):
    transport = FakeTransport(reachable=True)
    link = make_link(transport, sessions, store, tmp_path, interval=0.02)

    link.start_heartbeats()
    deadline = time.time() + 2
    while not transport.sent and time.time() < deadline:
        time.sleep(0.01)
    link.stop_heartbeats()

    assert transport.sent
    assert all(payload == {"heartbeat": True} for payload in transport.sent)

    sent_after_stop = len(transport.sent)
    time.sleep(0.1)
    assert len(transport.sent) == sent_after_stop
