import pytest

from app.snippets import find_snippet
from app.state import ChallengeSession


def test_start_unknown_language_returns_none_and_keeps_state(clock):
    session = ChallengeSession(clock=clock)
    assert session.start("cobol") is None
    assert session.start_time is None
    assert session.expected_text == ""


def test_start_picks_snippet_and_records_time(clock, pick):
    session = ChallengeSession(clock=clock, rng=pick("Array Methods"))
    snippet = session.start("javascript")
    assert snippet.title == "Array Methods"
    assert session.expected_text == snippet.code
    assert session.typed_text == ""
    assert session.start_time == clock.now


def test_start_chooses_from_catalog(clock):
    session = ChallengeSession(clock=clock)
    titles = {s.title for s in [session.start("python") for _ in range(20)]}
    assert titles <= {"List Comprehension", "Class Definition", "Decorator Pattern", "Context Manager"}


def test_typing_whole_snippet_is_full_accuracy(clock, pick):
    session = ChallengeSession(clock=clock, rng=pick("Array Methods"))
    snippet = session.start("javascript")
    clock.advance(60)
    progress = session.record_input(snippet.code)
    assert progress.accuracy == 100.0
    assert progress.wpm == round(len(snippet.code) / 5)


def test_partial_input_stays_below_full_accuracy(clock):
    session = ChallengeSession(clock=clock)
    session.start("python")
    progress = session.record_input(session.expected_text[:10])
    assert 0 < progress.accuracy < 100


def test_wpm_at_zero_elapsed_is_clamped(clock):
    session = ChallengeSession(clock=clock)
    session.start("java")
    progress = session.record_input("abcde")
    # one word in one second
    assert progress.wpm == 60


def test_reset_clears_typed_text_and_start(clock):
    session = ChallengeSession(clock=clock)
    session.start("cpp")
    session.record_input("temp")
    session.reset()
    assert session.typed_text == ""
    assert not session.is_started


def test_array_methods_snippet_exists():
    snippet = find_snippet("javascript", "Array Methods")
    assert snippet is not None
    assert snippet.code.startswith("const numbers = [1, 2, 3, 4, 5];")
    assert snippet.language == "javascript"
