from __future__ import annotations

import logging
import os
from datetime import tzinfo
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


class Settings:
    """Centralized configuration for the MoodFit backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("MOODFIT_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("MOODFIT_DB_PATH") or (self.data_root / "moodfit.db")
        ).expanduser()
        # Calendar-day boundaries for streaks. Empty means the host's local zone.
        self.timezone_name: str = (os.environ.get("MOODFIT_TZ") or "").strip()

        self.timer_default_sec: int = int(os.environ.get("MOODFIT_TIMER_DEFAULT_SEC") or "30")
        self.timer_presets_sec: List[int] = [30, 60]
        self.tick_interval_ms: int = int(os.environ.get("MOODFIT_TICK_INTERVAL_MS") or "100")

        self.min_exercises_per_workout: int = int(os.environ.get("MOODFIT_MIN_EXERCISES") or "3")
        self.max_exercises_per_workout: int = int(os.environ.get("MOODFIT_MAX_EXERCISES") or "10")
        self.recent_history_size: int = 5

        self.log_level: str = (os.environ.get("MOODFIT_LOG_LEVEL") or "INFO").upper()
        self.host: str = os.environ.get("MOODFIT_HOST") or os.environ.get("HOST") or "127.0.0.1"
        self.port_raw: str = os.environ.get("MOODFIT_PORT") or os.environ.get("PORT") or "8000"

        cors = os.environ.get("CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    @property
    def tz(self) -> Optional[tzinfo]:
        """Configured zone, or None for the host's local time."""
        if not self.timezone_name:
            return None
        try:
            return ZoneInfo(self.timezone_name)
        except ZoneInfoNotFoundError:
            logger.warning("Unknown MOODFIT_TZ %r, falling back to local time", self.timezone_name)
            return None


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
