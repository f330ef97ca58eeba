# File: gameframe/core/config/settings.py

import os
from pathlib import Path


class Settings:
    # --- Paths ---
    # gameframe/core/config/settings.py -> gameframe/core/config -> gameframe/core -> gameframe -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("GAMEFRAME_DATA_DIR", str(BASE_DIR / "data")))
    ARTIFACTS_DIR: Path = DATA_DIR / "artifacts"
    # Private folder received companion clips are moved into before transcription
    CLIP_INBOX_DIR: Path = DATA_DIR / "companion_audio"

    # --- Database ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "gameframe_db")

    @property
    def DATABASE_URL(self) -> str:
        # The pipeline runs on-device, so the local SQLite file is the default.
        if os.getenv("USE_POSTGRES", "false").lower() == "true":
            return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

        return os.getenv("SQLITE_URL", "sqlite:///./gameframe.db")

    # --- Attribution ---
    ATTRIBUTION_THRESHOLD: float = float(os.getenv("ATTRIBUTION_THRESHOLD", "0.70"))
    ATTRIBUTION_MAX_GRAM: int = int(os.getenv("ATTRIBUTION_MAX_GRAM", "3"))

    # --- Transcript Defaults ---
    TRANSCRIPT_LANGUAGE: str = os.getenv("TRANSCRIPT_LANGUAGE", "English")
    # 1 is the lowest, 5 the most confident
    TRANSCRIPT_CONFIDENCE: int = min(5, max(1, int(os.getenv("TRANSCRIPT_CONFIDENCE", "5"))))

    # --- Model Configuration ---
    WHISPER_MODEL_NAME: str = os.getenv("WHISPER_MODEL_NAME", "base")
    WHISPER_DEVICE: str = "cuda" if os.getenv("USE_CUDA", "false").lower() == "true" else "cpu"

    # --- Companion Device ---
    MIN_COMPANION_APP_VERSION: str = os.getenv("MIN_COMPANION_APP_VERSION", "1.2.0")
    HEARTBEAT_INTERVAL_SECONDS: float = float(os.getenv("HEARTBEAT_INTERVAL_SECONDS", "1.0"))

    # --- Key Moment Writes ---
    # 'keep' leaves a key moment behind when its transcript fails, 'compensate' deletes it
    ORPHAN_POLICY: str = os.getenv("ORPHAN_POLICY", "keep")

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
        self.CLIP_INBOX_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
