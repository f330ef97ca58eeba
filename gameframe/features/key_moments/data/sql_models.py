import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from gameframe.core.database.base import Base


def utc_now():
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid.uuid4())


class KeyMomentModel(Base):
    """
    One clip's time window and its feedback targets.
    """
    __tablename__ = "key_moments"

    id = Column(String(36), primary_key=True, default=new_id)

    team_id = Column(String, nullable=True, index=True)
    game_id = Column(String, nullable=False, index=True)
    uploaded_by = Column(String, nullable=False)

    # Remote path of the uploaded clip, NULL for transcript-only messages
    audio_path = Column(String, nullable=True)

    frame_start = Column(DateTime(timezone=True), nullable=False)
    frame_end = Column(DateTime(timezone=True), nullable=False)

    # Ordered list of player ids
    feedback_for = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), default=utc_now)

    transcripts = relationship("TranscriptModel", back_populates="key_moment")


class TranscriptModel(Base):
    """
    The recognized text of a clip. No transcript without its key moment.
    """
    __tablename__ = "transcripts"

    id = Column(String(36), primary_key=True, default=new_id)
    key_moment_id = Column(String(36), ForeignKey("key_moments.id"), nullable=False, index=True)

    transcript = Column(Text, nullable=False)
    language = Column(String, default="English")
    generated_by = Column(String, nullable=True)
    confidence = Column(Integer, nullable=False)
    game_id = Column(String, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)

    key_moment = relationship("KeyMomentModel", back_populates="transcripts")
