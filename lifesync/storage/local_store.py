"""JSON file persistence for daily logs and the user profile.

Two independent documents, each rewritten in full on every mutation. There
is no versioning or migration; an unreadable document falls back to the
seed data.
"""

import json
import logging
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from lifesync.models import DailyLog, Mood, UserProfile

logger = logging.getLogger(__name__)

LOGS_FILE = "lifesync_logs.json"
PROFILE_FILE = "lifesync_profile.json"

_LOG_LIST = TypeAdapter(List[DailyLog])


def default_profile() -> UserProfile:
    return UserProfile(name="Alex", age=30, goals=["Reduce stress", "Improve cardio", "Track macros"])


def seed_logs(now: Optional[datetime] = None) -> List[DailyLog]:
    """Three sample days, oldest first."""
    now = now or datetime.now(timezone.utc)
    return [
        DailyLog(id="1", date=(now - timedelta(days=2)).isoformat(), mood=Mood.STRESSED,
                 heart_rate=85, calories_in=2400, exercise_minutes=15, notes="Work was hard."),
        DailyLog(id="2", date=(now - timedelta(days=1)).isoformat(), mood=Mood.OKAY,
                 heart_rate=78, calories_in=2100, exercise_minutes=30, notes="Better day."),
        DailyLog(id="3", date=now.isoformat(), mood=Mood.GREAT,
                 heart_rate=68, calories_in=1800, exercise_minutes=60, notes="Crushed the workout!"),
    ]


class LocalStore:
    """
    Durable key-value style store backed by two JSON files.

    Logs are kept in chronological order (new entries appended), so the tail
    of ``load_logs()`` holds the most recent days.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        self.logs_path = self.data_dir / LOGS_FILE
        self.profile_path = self.data_dir / PROFILE_FILE

    def load_logs(self) -> List[DailyLog]:
        if not self.logs_path.exists():
            return seed_logs()
        try:
            return _LOG_LIST.validate_json(self.logs_path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.error("❌ Failed to load logs from %s, using seed data: %s", self.logs_path, e)
            return seed_logs()

    def save_logs(self, logs: List[DailyLog]) -> None:
        self._write(self.logs_path, _LOG_LIST.dump_python(logs, mode="json", by_alias=True))

    def add_log(self, log: DailyLog) -> List[DailyLog]:
        logs = self.load_logs()
        logs.append(log)
        self.save_logs(logs)
        logger.info("Saved log %s (%d total)", log.id, len(logs))
        return logs

    def load_profile(self) -> UserProfile:
        if not self.profile_path.exists():
            return default_profile()
        try:
            return UserProfile.model_validate_json(self.profile_path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.error("❌ Failed to load profile from %s, using default: %s", self.profile_path, e)
            return default_profile()

    def save_profile(self, profile: UserProfile) -> None:
        self._write(self.profile_path, profile.model_dump(mode="json", by_alias=True))

    def _write(self, path: Path, payload) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        os.replace(tmp_path, path)
