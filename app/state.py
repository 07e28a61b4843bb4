from dataclasses import dataclass
from typing import Callable, List, Optional
import logging
import random
import time

from app.calculation import elapsed_minutes, prefix_accuracy, round_half_up, words_per_minute
from app.snippets import Snippet, list_snippets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Progress:
    accuracy: float
    wpm: int


class ChallengeSession:
    """The snippet being retyped, plus what has been typed so far."""

    def __init__(
        self,
        catalog: Callable[[str], List[Snippet]] = list_snippets,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self._catalog = catalog
        self._clock = clock
        self._rng = rng or random.Random()
        self.snippet: Optional[Snippet] = None
        self.language: Optional[str] = None
        self.expected_text = ""
        self.typed_text = ""
        self.start_time: Optional[float] = None

    @property
    def is_started(self) -> bool:
        return self.start_time is not None

    def start(self, language: str, difficulty: str = "easy") -> Optional[Snippet]:
        snippets = self._catalog(language)
        if not snippets:
            logger.warning("No snippets for language %r", language)
            return None
        snippet = self._rng.choice(snippets)
        self.snippet = snippet
        self.language = language
        self.expected_text = snippet.code
        self.typed_text = ""
        self.start_time = self._clock()
        return snippet

    def reset(self):
        self.typed_text = ""
        self.start_time = None

    def record_input(self, typed_text: str) -> Progress:
        self.typed_text = typed_text or ""
        return Progress(accuracy=self.accuracy(), wpm=self.wpm())

    def accuracy(self) -> float:
        return prefix_accuracy(self.expected_text, self.typed_text)

    def elapsed_minutes(self) -> float:
        if self.start_time is None:
            return 0.0
        return elapsed_minutes(self.start_time, self._clock())

    def wpm(self) -> int:
        return round_half_up(words_per_minute(len(self.typed_text), self.elapsed_minutes()))
