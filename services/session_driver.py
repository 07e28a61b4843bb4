# services/session_driver.py
from __future__ import annotations
from enum import Enum
from typing import Callable, Optional
import logging
import time

from app import config
from app.calculation import elapsed_minutes, words_per_minute
from app.snippets import Snippet, generate_snippet
from app.state import ChallengeSession, Progress
from services.leaderboard import LeaderboardEntry, LeaderboardStore
from services.metrics import MetricsPresenter, MetricsView
from services.typing_engine import PracticeSession

logger = logging.getLogger(__name__)


class DriverState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


class SessionDriver:
    """
    Idle/Active state machine for one typing challenge at a time.

    Inbound messages are plain method calls: ``start``, ``keystroke``, ``tick``
    and ``reset``. The ticker only needs ``arm(interval_ms, callback)`` and
    ``cancel()``; ``show_text`` receives whatever the editor should display.
    """

    def __init__(
        self,
        presenter: MetricsPresenter,
        ticker,
        challenge: Optional[ChallengeSession] = None,
        clock: Callable[[], float] = time.time,
        show_text: Optional[Callable[[str], None]] = None,
        tick_ms: int = config.TICK_MS,
    ):
        self.presenter = presenter
        self.ticker = ticker
        self.clock = clock
        self.challenge = challenge or ChallengeSession(clock=clock)
        self.show_text = show_text or (lambda text: None)
        self.tick_ms = tick_ms
        self.state = DriverState.IDLE
        self.session = PracticeSession()

    @property
    def is_active(self) -> bool:
        return self.state is DriverState.ACTIVE

    # ---------------- Transitions ----------------
    def start(self, language: str, difficulty: str = "easy") -> Optional[Snippet]:
        snippet = self.challenge.start(language, difficulty)
        if snippet is None:
            return None
        self.ticker.cancel()
        self.session = PracticeSession(snippet.code, started_at=self.challenge.start_time)
        self.presenter.bind(self.session)
        self.show_text(snippet.code)
        self.state = DriverState.ACTIVE
        logger.info("Challenge started: %s / %s", language, snippet.title)
        self.presenter.update(0, 100, 0, "")
        self.ticker.arm(self.tick_ms, self.tick)
        return snippet

    def reset(self) -> MetricsView:
        self.ticker.cancel()
        if self.is_active:
            logger.info("Challenge reset")
        self.state = DriverState.IDLE
        self.challenge.reset()
        self.show_text("")
        return self.presenter.update(0, 100, 0, "")

    # ---------------- Messages ----------------
    def keystroke(self, key: str, offset: int) -> Optional[MetricsView]:
        if not self.is_active or not self.session.keys.tracks(key):
            return None
        engine = self.session.engine
        correct = bool(engine.classify(key, offset))
        engine.process_key(key, correct)
        minutes = elapsed_minutes(self.session.started_at, self.clock())
        speed = self.session.keys.record(key, correct, engine.stats.keystrokes, minutes)
        return self.presenter.update(speed, engine.accuracy(), engine.score(), engine.stats.last_key)

    def tick(self) -> Optional[MetricsView]:
        if not self.is_active:
            return None
        engine = self.session.engine
        minutes = elapsed_minutes(self.session.started_at, self.clock())
        self.session.minutes_practiced = minutes
        wpm = words_per_minute(engine.stats.keystrokes, minutes)
        return self.presenter.update(wpm, engine.accuracy(), engine.score(), self.session.last_key)

    # ---------------- Editor commands ----------------
    def check_progress(self, typed_text: str) -> Optional[Progress]:
        if not self.is_active:
            return None
        return self.challenge.record_input(typed_text)

    def upload(self, text: str):
        self.show_text((text or "").replace("\r\n", "\n"))

    def load_generated(self, language: str, difficulty: str = "medium") -> Snippet:
        snippet = generate_snippet(language, difficulty)
        self.show_text(snippet.code)
        return snippet

    def submit_score(self, username: str, leaderboard: LeaderboardStore) -> Optional[LeaderboardEntry]:
        """Write the latest published numbers for the current language to the leaderboard."""
        language = self.challenge.language
        if language is None or not username:
            return None
        snap = self.presenter.snapshot
        return leaderboard.add_score(
            username, language, snap.score, round(snap.wpm, 1), round(snap.accuracy, 1)
        )
