# File: gameframe/core/common/enums.py

from enum import Enum, unique

@unique
class PipelineStage(str, Enum):
    RECEIVED = "received"
    TRANSCRIBING = "transcribing"
    MATCHING = "matching"
    PERSISTING_KEY_MOMENT = "persisting_key_moment"
    PERSISTING_TRANSCRIPT = "persisting_transcript"
    CACHED = "cached"

@unique
class PipelineStatus(str, Enum):
    CACHED = "cached"
    FAILED = "failed"
    SKIPPED = "skipped"

@unique
class DeliveryStatus(str, Enum):
    SENT = "sent"
    QUEUED = "queued"

@unique
class OrphanPolicy(str, Enum):
    KEEP = "keep"
    COMPENSATE = "compensate"
