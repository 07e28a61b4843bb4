import pytest


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeTicker:
    """Stands in for the QTimer adapter; ticks only when the test says so."""

    def __init__(self):
        self.callback = None
        self.interval_ms = None
        self.cancels = 0

    @property
    def armed(self) -> bool:
        return self.callback is not None

    def arm(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback

    def cancel(self):
        self.cancels += 1
        self.callback = None

    def fire(self):
        if self.callback is not None:
            return self.callback()


class RecordingSink:
    def __init__(self):
        self.views = []

    def render(self, view):
        self.views.append(view)

    @property
    def last(self):
        return self.views[-1]


class FirstChoice:
    """rng stand-in that always picks the snippet with a given title (or the first)."""

    def __init__(self, title=None):
        self.title = title

    def choice(self, seq):
        for item in seq:
            if item.title == self.title:
                return item
        return seq[0]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticker():
    return FakeTicker()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def pick():
    return FirstChoice
