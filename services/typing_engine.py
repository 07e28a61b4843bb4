# services/typing_engine.py
from dataclasses import dataclass
from typing import Optional

from app.calculation import keystroke_accuracy, score
from services.keystats import KeyStats


@dataclass
class TypingStats:
    keystrokes: int = 0
    correct_chars: int = 0
    streak: int = 0
    last_key: str = ""


class TypingEngine:
    """Classifies letter keystrokes against the expected text and keeps running totals."""

    def __init__(self, target_text: str = ""):
        self.target = target_text or ""
        self.stats = TypingStats()

    def classify(self, key: str, offset: int) -> Optional[bool]:
        # comparison is case-insensitive; characters outside the text count as wrong
        if not key:
            return None
        if 0 <= offset < len(self.target):
            return self.target[offset].upper() == key.upper()
        return False

    def process_key(self, key: str, correct: bool):
        self.stats.keystrokes += 1
        self.stats.last_key = key.upper()
        if correct:
            self.stats.correct_chars += 1
            self.stats.streak += 1
        else:
            self.stats.streak = 0

    def accuracy(self) -> float:
        return keystroke_accuracy(self.stats.correct_chars, self.stats.keystrokes)

    def score(self) -> int:
        return score(self.stats.correct_chars, self.accuracy())


class PracticeSession:
    """Everything one challenge accumulates. A fresh one is built on every start."""

    def __init__(self, target_text: str = "", started_at: float = 0.0):
        self.engine = TypingEngine(target_text)
        self.keys = KeyStats()
        self.started_at = started_at
        self.minutes_practiced = 0.0

    @property
    def streak(self) -> int:
        return self.engine.stats.streak

    @property
    def top_speed(self) -> float:
        return self.keys.top_speed

    @property
    def last_key(self) -> str:
        return self.engine.stats.last_key
