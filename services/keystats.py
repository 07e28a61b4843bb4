# services/keystats.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from app.calculation import words_per_minute

# letters ranked by English frequency
ALL_KEYS: Tuple[str, ...] = tuple("ENIARLTOSUDYCGHPMKBWFVZXQJ")


class KeyState(str, Enum):
    CURRENT = "current"
    CORRECT = "correct"
    WRONG = "wrong"
    NEUTRAL = "neutral"


@dataclass
class KeyStat:
    correct: int = 0
    wrong: int = 0
    last_speed: float = 0.0
    top_speed: float = 0.0

    @property
    def attempts(self) -> int:
        return self.correct + self.wrong


class KeyStats:
    def __init__(self):
        self.stats: Dict[str, KeyStat] = {k: KeyStat() for k in ALL_KEYS}
        self.top_speed = 0.0

    @staticmethod
    def normalize(key: str) -> str:
        return (key or "").upper()

    def tracks(self, key: str) -> bool:
        return self.normalize(key) in self.stats

    def reset(self):
        for k in ALL_KEYS:
            self.stats[k] = KeyStat()
        self.top_speed = 0.0

    def record(self, key: str, correct: bool, total_keystrokes: int, minutes: float) -> float:
        """Count the press and return the running speed over all keystrokes so far."""
        stat = self.stats[self.normalize(key)]
        if correct:
            stat.correct += 1
        else:
            stat.wrong += 1
        speed = words_per_minute(total_keystrokes, minutes)
        stat.last_speed = speed
        if speed > stat.top_speed:
            stat.top_speed = speed
        if speed > self.top_speed:
            self.top_speed = speed
        return speed

    def state(self, key: str, current_key: str = "") -> KeyState:
        stat = self.stats[key]
        if key == self.normalize(current_key):
            return KeyState.CURRENT
        if stat.correct > 0:
            return KeyState.CORRECT
        if stat.wrong > 0:
            return KeyState.WRONG
        return KeyState.NEUTRAL

    def heatmap(self, current_key: str = "") -> List[Tuple[str, KeyState]]:
        return [(k, self.state(k, current_key)) for k in ALL_KEYS]

    def weakest(self, limit: int = 10) -> List[Tuple[str, float, int, int]]:
        """(key, miss_rate, hits, misses) for keys pressed at least once, worst first."""
        result = []
        for k, v in self.stats.items():
            if v.attempts == 0:
                continue
            result.append((k, v.wrong / v.attempts, v.correct, v.wrong))
        return sorted(result, key=lambda x: (-x[1], -(x[2] + x[3])))[:limit]
