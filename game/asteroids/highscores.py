"""
Persisted top-N high-score table (JSON file)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, asdict
from typing import List, Optional

MAX_ENTRIES = 3
INITIALS_LEN = 3


def clean_initials(initials: str) -> str:
    """Upper-case, strip, and pad/truncate to exactly three characters"""
    text = "".join(ch for ch in initials.upper() if not ch.isspace())
    return text[:INITIALS_LEN].ljust(INITIALS_LEN, "-")


@dataclass
class HighScoreEntry:
    initials: str
    score: int


class HighScoreTable:
    """Descending list of the best scores, capped at `max_entries`"""

    def __init__(self, path: Optional[str] = "highscores.json", max_entries: int = MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.path = path
        self.max_entries = max_entries
        self.entries: List[HighScoreEntry] = []

    def load(self) -> List[HighScoreEntry]:
        """Read the table from disk. A missing or unreadable file gives an empty table."""
        self.entries = []
        if self.path is None or not os.path.exists(self.path):
            return self.entries
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            entries = [
                HighScoreEntry(clean_initials(str(e["initials"])), int(e["score"]))
                for e in data["scores"]
            ]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            print(f"[HighScoreTable] Ignoring unreadable {self.path}: {exc}")
            return self.entries
        entries.sort(key=lambda e: e.score, reverse=True)
        self.entries = entries[: self.max_entries]
        return self.entries

    def save(self):
        if self.path is None:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"scores": [asdict(e) for e in self.entries]}, f, indent=2)

    def lowest(self) -> Optional[int]:
        return self.entries[-1].score if self.entries else None

    def is_top_score(self, score: int) -> bool:
        if len(self.entries) < self.max_entries:
            return True
        return score > self.entries[-1].score

    def submit(self, initials: str, score: int) -> Optional[int]:
        """
        Insert a score in descending order, keeping at most `max_entries`.

        Returns the 0-based rank, or None if the score did not place. A tie
        goes below the existing entry.
        """
        if not self.is_top_score(score):
            return None
        rank = len(self.entries)
        for i, entry in enumerate(self.entries):
            if score > entry.score:
                rank = i
                break
        self.entries.insert(rank, HighScoreEntry(clean_initials(initials), int(score)))
        del self.entries[self.max_entries:]
        return rank
