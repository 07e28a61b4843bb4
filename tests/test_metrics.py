import pytest

from services.keystats import KeyState
from services.metrics import DeltaLabel, MetricsPresenter, MetricsSnapshot
from services.typing_engine import PracticeSession


def test_delta_label_tones():
    assert DeltaLabel.of(2.3) == DeltaLabel("(+2.3)", "positive")
    assert DeltaLabel.of(-1.0) == DeltaLabel("(-1.0)", "negative")
    assert DeltaLabel.of(0) == DeltaLabel("", "")


def test_update_computes_deltas_against_previous_snapshot(sink):
    presenter = MetricsPresenter()
    presenter.add_sink(sink)
    presenter.update(40, 90, 12, "A")
    view = presenter.update(45, 80, 12, "B")
    assert view.wpm_delta.text == "(+5.0)"
    assert view.accuracy_delta.tone == "negative"
    assert view.score_delta.text == ""
    assert view.last_speed == "40.0wpm"
    assert presenter.snapshot == MetricsSnapshot(45, 80, 12)
    assert len(sink.views) == 2
    assert sink.last is view


def test_first_update_compares_with_initial_snapshot():
    presenter = MetricsPresenter()
    view = presenter.update(0, 100, 0, "")
    assert view.wpm_delta.text == ""
    assert view.accuracy_delta.text == ""
    assert view.last_speed == "0.0wpm"


def test_streak_and_learning_rate_text():
    presenter = MetricsPresenter()
    session = PracticeSession("abc")
    presenter.bind(session)
    assert presenter.update(0, 100, 0).streak == "No accuracy streaks."
    session.engine.process_key("a", True)
    session.engine.process_key("b", True)
    view = presenter.update(0, 100, 0)
    assert view.streak == "2 correct"
    assert view.learning_rate == "+0.1wpm/lesson"


def test_goal_progress_capped_for_bar_only():
    presenter = MetricsPresenter(goal_minutes=30)
    session = PracticeSession()
    presenter.bind(session)
    session.minutes_practiced = 15
    view = presenter.update(0, 100, 0)
    assert view.goal_text == "50%/30 minutes"
    assert view.goal_width == pytest.approx(50.0)

    session.minutes_practiced = 45
    view = presenter.update(0, 100, 0)
    assert view.goal_text == "150%/30 minutes"
    assert view.goal_width == 100.0


def test_top_speed_and_heatmap_come_from_bound_session():
    presenter = MetricsPresenter()
    session = PracticeSession("e")
    session.keys.record("e", True, 10, 1.0)
    presenter.bind(session)
    view = presenter.update(2.0, 100, 1, "E")
    assert view.top_speed == "2.0wpm"
    assert view.current_key == "E"
    assert dict(view.heatmap)["E"] is KeyState.CURRENT
