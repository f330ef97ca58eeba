# File: gameframe/features/session/service/recording_cache.py
import logging
from dataclasses import replace
from threading import Lock
from typing import Iterable, List, Tuple
from gameframe.core.shared_types import RecordingWindow
from gameframe.features.attribution.domain.models import RosterMember
from ..domain.models import SessionRecordingEntry

logger = logging.getLogger(__name__)

class SessionRecordingCache:
    """
    Append-only ledger of the recordings stored during one game session.

    Indexes start at 0 and are handed out in the order appends complete.
    An index is assigned and its entry stored under one lock, so two clips
    finishing back-to-back can never share or skip an index.
    """

    def __init__(self):
        self._lock = Lock()
        self._entries: List[SessionRecordingEntry] = []

    def append(self, entry: SessionRecordingEntry) -> SessionRecordingEntry:
        """
        Stores the entry under the next free index (whatever index it carried).
        Returns the stored entry.
        """
        with self._lock:
            stored = replace(entry, local_index=len(self._entries))
            self._entries.append(stored)
        logger.debug(f"Session cache: appended recording #{stored.local_index} (key moment {stored.key_moment_id})")
        return stored

    def add(self,
            key_moment_id: str,
            transcript_id: str,
            text: str,
            window: RecordingWindow,
            feedback_for: Iterable[RosterMember]) -> SessionRecordingEntry:
        return self.append(SessionRecordingEntry(
            local_index=-1,
            key_moment_id=key_moment_id,
            transcript_id=transcript_id,
            text=text,
            window=window,
            feedback_for=tuple(feedback_for)
        ))

    def all(self) -> Tuple[SessionRecordingEntry, ...]:
        """Read-only snapshot in index order."""
        with self._lock:
            return tuple(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries = []

    @property
    def next_index(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.next_index
