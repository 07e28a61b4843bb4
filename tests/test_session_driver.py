import pytest

from app.state import ChallengeSession
from services.leaderboard import LeaderboardStore
from services.metrics import MetricsPresenter
from services.session_driver import DriverState, SessionDriver
from utils.db_helper import MemoryStore


@pytest.fixture
def shown():
    return []


@pytest.fixture
def make_driver(clock, ticker, sink, shown, pick):
    def make(title="Array Methods"):
        presenter = MetricsPresenter()
        presenter.add_sink(sink)
        challenge = ChallengeSession(clock=clock, rng=pick(title))
        return SessionDriver(presenter, ticker, challenge=challenge, clock=clock, show_text=shown.append)
    return make


def type_text(driver, text):
    for offset, ch in enumerate(text):
        driver.keystroke(ch, offset)


def test_start_enters_active_and_publishes_zeroes(make_driver, ticker, sink, shown):
    driver = make_driver()
    snippet = driver.start("javascript")
    assert driver.state is DriverState.ACTIVE
    assert shown == [snippet.code]
    assert ticker.armed and ticker.interval_ms == 1000
    first = sink.last
    assert (first.wpm, first.accuracy, first.score) == (0, 100, 0)


def test_start_unknown_language_stays_idle(make_driver, ticker, sink):
    driver = make_driver()
    assert driver.start("brainfuck") is None
    assert driver.state is DriverState.IDLE
    assert not ticker.armed
    assert sink.views == []


def test_keystrokes_ignored_while_idle(make_driver, sink):
    driver = make_driver()
    assert driver.keystroke("c", 0) is None
    assert driver.tick() is None
    assert sink.views == []


def test_full_snippet_typed_correctly(make_driver, clock):
    driver = make_driver("Array Methods")
    snippet = driver.start("javascript")
    clock.advance(30)
    type_text(driver, snippet.code)
    letters = sum(1 for ch in snippet.code if ch.isalpha())

    assert driver.session.streak == letters
    assert driver.session.engine.accuracy() == 100.0
    assert driver.presenter.snapshot.score == letters
    assert driver.check_progress(snippet.code).accuracy == 100.0


def test_streak_counts_and_resets(make_driver):
    driver = make_driver("Array Methods")
    driver.start("javascript")  # "const numbers ..."
    driver.keystroke("c", 0)
    driver.keystroke("o", 1)
    assert driver.session.streak == 2
    driver.keystroke("x", 2)
    assert driver.session.streak == 0
    driver.keystroke("s", 3)
    assert driver.session.streak == 1


def test_wrong_keystroke_updates_accuracy_and_score(make_driver, sink):
    driver = make_driver("Array Methods")
    driver.start("javascript")
    driver.keystroke("c", 0)
    driver.keystroke("q", 1)
    view = sink.last
    assert view.accuracy == pytest.approx(50.0)
    assert view.score == 1  # round(1 * 0.5) rounds half up
    assert driver.session.keys.stats["Q"].wrong == 1


def test_keystroke_is_case_insensitive(make_driver):
    driver = make_driver("Array Methods")
    driver.start("javascript")
    driver.keystroke("C", 0)
    assert driver.session.keys.stats["C"].correct == 1


def test_offset_past_the_end_counts_as_wrong(make_driver):
    driver = make_driver()
    snippet = driver.start("javascript")
    driver.keystroke("a", len(snippet.code) + 5)
    assert driver.session.engine.stats.keystrokes == 1
    assert driver.session.engine.stats.correct_chars == 0


def test_non_letter_keystroke_changes_nothing(make_driver, sink):
    driver = make_driver("Array Methods")
    driver.start("javascript")
    driver.keystroke("c", 0)
    before = len(sink.views)
    for key in [";", " ", "(", "1", "\n", "Shift"]:
        assert driver.keystroke(key, 5) is None
    assert len(sink.views) == before
    assert driver.session.streak == 1
    assert driver.session.engine.stats.keystrokes == 1
    assert sum(s.attempts for s in driver.session.keys.stats.values()) == 1


def test_tick_recomputes_from_totals(make_driver, clock, ticker, sink):
    driver = make_driver("Array Methods")
    driver.start("javascript")
    type_text(driver, "const")
    clock.advance(60)
    view = ticker.fire()
    assert driver.session.minutes_practiced == pytest.approx(1.0)
    assert view.wpm == pytest.approx(1.0)  # 5 keystrokes in one minute
    assert view.accuracy == 100.0
    assert view.current_key == "T"
    assert view.goal_text == "3%/30 minutes"


def test_tick_at_start_uses_clamped_elapsed(make_driver, ticker):
    driver = make_driver()
    driver.start("python")
    view = ticker.fire()
    assert view.wpm == 0
    assert view.accuracy == 100.0


def test_reset_returns_to_idle_and_stops_ticks(make_driver, clock, ticker, sink, shown):
    driver = make_driver()
    driver.start("java")
    type_text(driver, "pub")
    clock.advance(5)
    ticker.fire()

    view = driver.reset()
    assert driver.state is DriverState.IDLE
    assert (view.wpm, view.accuracy, view.score) == (0, 100, 0)
    assert not ticker.armed
    assert shown[-1] == ""

    published = len(sink.views)
    assert ticker.fire() is None
    assert driver.tick() is None
    assert len(sink.views) == published


def test_reset_while_idle_is_allowed(make_driver, ticker):
    driver = make_driver()
    view = driver.reset()
    assert driver.state is DriverState.IDLE
    assert view.accuracy == 100


def test_restart_clears_counters_and_top_speed(make_driver, clock):
    driver = make_driver("Array Methods")
    driver.start("javascript")
    clock.advance(1)
    type_text(driver, "const")
    assert driver.session.top_speed > 0
    old = driver.session

    driver.start("javascript")
    assert driver.session is not old
    assert driver.session.top_speed == 0
    assert driver.session.streak == 0
    assert driver.session.engine.stats.keystrokes == 0
    assert all(s.attempts == 0 for s in driver.session.keys.stats.values())


def test_top_speed_never_decreases_within_session(make_driver, clock):
    driver = make_driver("Array Methods")
    snippet = driver.start("javascript")
    seen = []
    for offset, ch in enumerate(snippet.code[:40]):
        clock.advance(0.5 if offset < 20 else 5)
        driver.keystroke(ch, offset)
        seen.append(driver.session.top_speed)
    assert seen == sorted(seen)


def test_submit_score_writes_latest_numbers(make_driver, clock):
    board = LeaderboardStore(MemoryStore())
    driver = make_driver("Array Methods")
    assert driver.submit_score("alice", board) is None

    driver.start("javascript")
    clock.advance(60)
    type_text(driver, "const")
    entry = driver.submit_score("alice", board)
    assert entry.score == 5
    assert entry.accuracy == 100.0
    assert board.get_leaderboard("javascript") == [entry]


def test_upload_and_generate_only_change_displayed_text(make_driver, shown):
    driver = make_driver()
    driver.upload("print('hi')\r\n")
    snippet = driver.load_generated("cpp")
    assert shown == ["print('hi')\n", snippet.code]
    assert driver.state is DriverState.IDLE
