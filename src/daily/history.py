"""
Daily Challenge history persistence.

Results are stored per date in a single JSON file; statistics (streaks,
averages, personal best) are derived from that history on demand.
"""
from __future__ import annotations

import json
import logging
import time
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

log = logging.getLogger(__name__)

DEFAULT_STATS: Dict[str, Any] = {
    "currentStreak": 0,
    "maxStreak": 0,
    "totalCompleted": 0,
    "averageStars": "0.0",
    "bestStars": 0,
    "lastPlayed": None,
}


class HistoryStore:
    """JSON-file store of daily results keyed by YYYY-MM-DD."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            log.error("Failed to parse history file %s, ignoring it", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get_history(self) -> Dict[str, Dict[str, Any]]:
        return self._read().get("history", {})

    def _stored_stats(self) -> Dict[str, Any]:
        return self._read().get("stats", {})

    def _write(self, history: Dict[str, Dict[str, Any]], stats: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump({"history": history, "stats": stats}, f, indent=2, ensure_ascii=False)

    def save_result(
        self,
        day: str,
        stars: int,
        total_time: float,
        breakdown: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Record the result of *day* and refresh the statistics.

        Args:
            day: Date in YYYY-MM-DD format
            stars: Total stars earned
            total_time: Total time in seconds
            breakdown: Per-game results

        Returns:
            The updated statistics
        """
        history = self.get_history()
        history[day] = {
            "completed": True,
            "stars": stars,
            "totalTime": total_time,
            "breakdown": breakdown,
            "timestamp": int(time.time() * 1000),
        }

        stats = self._compute_stats(history, day, stars)
        self._write(history, stats)
        log.info("Saved daily result for %s: %d star(s), streak %d", day, stars, stats["currentStreak"])
        return stats

    def _compute_stats(self, history: Dict[str, Dict[str, Any]], day: str, stars: int) -> Dict[str, Any]:
        stats = {**DEFAULT_STATS, **self._stored_stats()}

        stats["currentStreak"] = calculate_streak(history, day)
        stats["maxStreak"] = max(stats["maxStreak"] or 0, stats["currentStreak"])

        frame = pd.DataFrame([{"day": d, "stars": r.get("stars", 0)} for d, r in history.items()])
        stats["totalCompleted"] = len(frame)
        stats["averageStars"] = f"{frame['stars'].mean():.1f}" if len(frame) else "0.0"
        stats["bestStars"] = max(stats["bestStars"] or 0, stars)
        stats["lastPlayed"] = day
        return stats

    def result_for(self, day: str) -> Optional[Dict[str, Any]]:
        return self.get_history().get(day)

    def has_completed(self, day: str) -> bool:
        result = self.result_for(day)
        return bool(result and result.get("completed"))

    def stats(self) -> Dict[str, Any]:
        return {**DEFAULT_STATS, **self._stored_stats()}

    def clear(self) -> None:
        """Delete all stored history and statistics."""
        if self.path.exists():
            self.path.unlink()


def calculate_streak(history: Dict[str, Dict[str, Any]], day: str) -> int:
    """Consecutive completed days ending on *day*."""
    streak = 0
    current = date.fromisoformat(day)
    while history.get(current.isoformat(), {}).get("completed"):
        streak += 1
        current -= timedelta(days=1)
    return streak
