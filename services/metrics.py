# services/metrics.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from app import config
from app.calculation import round_half_up
from services.keystats import KeyState
from services.typing_engine import PracticeSession


@dataclass(frozen=True)
class MetricsSnapshot:
    wpm: float = 0.0
    accuracy: float = 100.0
    score: int = 0


@dataclass(frozen=True)
class DeltaLabel:
    text: str = ""
    tone: str = ""  # "positive" | "negative" | ""

    @classmethod
    def of(cls, value: float) -> "DeltaLabel":
        if value > 0:
            return cls(f"(+{value:.1f})", "positive")
        if value < 0:
            return cls(f"({value:.1f})", "negative")
        return cls()


@dataclass(frozen=True)
class MetricsView:
    wpm: float
    accuracy: float
    score: int
    wpm_delta: DeltaLabel
    accuracy_delta: DeltaLabel
    score_delta: DeltaLabel
    last_speed: str
    top_speed: str
    learning_rate: str
    streak: str
    goal_text: str
    goal_width: float
    current_key: str = ""
    heatmap: List[Tuple[str, KeyState]] = field(default_factory=list)


class MetricsPresenter:
    """
    Turns raw numbers into what the metrics panel shows.

    Deltas are taken against the previous update; the snapshot is replaced
    after every update. Sinks are any objects with a ``render(view)`` method.
    """

    def __init__(self, goal_minutes: float = config.GOAL_MINUTES, learning_rate: float = config.LEARNING_RATE):
        self.goal_minutes = goal_minutes
        self.learning_rate = learning_rate
        self.snapshot = MetricsSnapshot()
        self.session = PracticeSession()
        self.last_view: Optional[MetricsView] = None
        self._sinks = []

    def bind(self, session: PracticeSession):
        self.session = session

    def add_sink(self, sink):
        self._sinks.append(sink)

    def goal_percent(self) -> float:
        if self.goal_minutes <= 0:
            return 0.0
        return 100.0 * self.session.minutes_practiced / self.goal_minutes

    def update(self, wpm: float, accuracy: float, score: int, current_key: str = "") -> MetricsView:
        prev = self.snapshot
        streak = self.session.streak
        pct = self.goal_percent()
        view = MetricsView(
            wpm=wpm,
            accuracy=accuracy,
            score=score,
            wpm_delta=DeltaLabel.of(wpm - prev.wpm),
            accuracy_delta=DeltaLabel.of(accuracy - prev.accuracy),
            score_delta=DeltaLabel.of(score - prev.score),
            last_speed=f"{prev.wpm:.1f}wpm",
            top_speed=f"{self.session.top_speed:.1f}wpm",
            learning_rate=f"+{self.learning_rate:.1f}wpm/lesson",
            streak=f"{streak} correct" if streak > 0 else "No accuracy streaks.",
            goal_text=f"{round_half_up(pct)}%/{self.goal_minutes:g} minutes",
            goal_width=min(100.0, pct),
            current_key=current_key or "",
            heatmap=self.session.keys.heatmap(current_key),
        )
        for sink in self._sinks:
            sink.render(view)
        self.snapshot = MetricsSnapshot(wpm=wpm, accuracy=accuracy, score=score)
        self.last_view = view
        return view
