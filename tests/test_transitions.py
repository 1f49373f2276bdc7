import math

import pytest

from speedtyper_core import (
    InboundEvent,
    OutboundEvent,
    PrevResult,
    SessionEvent,
    apply_event,
    apply_submission,
    apply_text,
    apply_tick,
    default_state,
    words_per_minute,
)


def test_default_state_is_idle_with_zeroed_counters():
    state = default_state("the quick brown")
    assert state.num_correct == 0
    assert state.num_missed == 0
    assert state.opp_score == 0
    assert state.current_index == 0
    assert state.practice_mode is False
    assert state.game_over is False
    assert state.start_time is None
    assert state.phase == "idle"
    assert state.current_line == ("the", "quick", "brown")


def test_default_state_rejects_non_positive_line_length():
    with pytest.raises(ValueError):
        default_state("", line_length=0)


def test_correct_submission_reports_score_outside_practice():
    state = default_state("alpha beta")
    t = apply_submission(state, "alpha", now=0.0)
    assert t.state.num_correct == 1
    assert t.state.prev_result is PrevResult.CORRECT
    assert t.state.input_word == "alpha"
    assert t.outbound == ((OutboundEvent.UPDATE, {"score": 1}),)
    assert t.notifications == (SessionEvent.CORRECT, SessionEvent.UPDATE)


def test_missed_submission_sends_nothing_and_still_advances():
    state = default_state("alpha beta")
    t = apply_submission(state, "alpah", now=0.0)
    assert t.state.num_missed == 1
    assert t.state.current_index == 1
    assert t.state.prev_result is PrevResult.INCORRECT
    assert t.outbound == ()
    assert t.notifications == (SessionEvent.UPDATE,)


def test_practice_mode_suppresses_correct_and_reporting():
    state = apply_event(default_state("alpha"), InboundEvent.PRACTICE, now=0.0).state
    t = apply_submission(state, "alpha", now=30.0)
    assert t.state.num_correct == 1
    assert t.outbound == ()
    assert SessionEvent.CORRECT not in t.notifications


def test_submission_past_end_is_always_incorrect():
    state = default_state("only")
    state = apply_submission(state, "only", now=0.0).state
    t = apply_submission(state, "only", now=0.0)
    assert t.state.num_missed == 1
    assert t.state.current_index == 2
    assert t.state.current_word is None


def test_input_state_is_not_mutated():
    state = default_state("alpha")
    apply_submission(state, "alpha", now=0.0)
    assert state.num_correct == 0
    assert state.current_index == 0


def test_match_resets_scores_cursor_and_game_over():
    state = default_state("a b c")
    state = apply_submission(state, "a", now=0.0).state
    state = apply_submission(state, "x", now=0.0).state
    state = apply_event(state, InboundEvent.LOSE, now=0.0).state

    t = apply_event(state, InboundEvent.MATCH, now=50.0)
    assert t.state.num_correct == 0
    assert t.state.num_missed == 0
    assert t.state.wpm == 0.0
    assert t.state.current_index == 0
    assert t.state.start_time == 50.0
    assert t.state.practice_mode is False
    assert t.state.game_over is False
    assert t.state.phase == "matched"
    assert t.notifications == (SessionEvent.UPDATE, SessionEvent.BEGIN_GAME)


def test_practice_keeps_scores():
    state = default_state("a b c")
    state = apply_submission(state, "a", now=0.0).state
    t = apply_event(state, InboundEvent.PRACTICE, now=10.0)
    assert t.state.practice_mode is True
    assert t.state.start_time == 10.0
    assert t.state.num_correct == 1
    assert t.state.current_index == 1
    assert t.state.phase == "practicing"
    assert t.notifications == ()


def test_opponent_update_overwrites_opp_score():
    state = default_state()
    state = apply_event(state, InboundEvent.UPDATE, {"score": 3}, now=0.0).state
    state = apply_event(state, InboundEvent.UPDATE, {"score": 2}, now=0.0).state
    assert state.opp_score == 2


def test_malformed_opponent_update_is_ignored():
    state = apply_event(default_state(), InboundEvent.UPDATE, {"score": 4}, now=0.0).state
    t = apply_event(state, InboundEvent.UPDATE, {"points": 9}, now=0.0)
    assert t.state.opp_score == 4
    assert t.notifications == ()


def test_win_then_lose_forwards_both():
    state = default_state()
    first = apply_event(state, InboundEvent.WIN, now=0.0)
    assert first.state.game_over is True
    assert first.notifications == (SessionEvent.GAME_WIN,)
    second = apply_event(first.state, InboundEvent.LOSE, now=0.0)
    assert second.state.game_over is True
    assert second.notifications == (SessionEvent.GAME_LOSE,)


def test_unknown_event_raises():
    with pytest.raises(ValueError):
        apply_event(default_state(), "victory", now=0.0)


def test_apply_text_replaces_text_and_keeps_cursor():
    state = apply_text(default_state(), {"text": "one two"}, seq=1).state
    state = apply_submission(state, "one", now=0.0).state
    t = apply_text(state, {"text": "three four five"}, seq=2)
    assert t.state.text.words == ("three", "four", "five")
    assert t.state.current_index == 1
    assert t.state.text_seq == 2
    assert t.notifications == (SessionEvent.PARAGRAPH_SET,)


def test_apply_text_discards_stale_response():
    state = apply_text(default_state(), {"text": "newer text"}, seq=2).state
    t = apply_text(state, {"text": "older text"}, seq=1)
    assert t.state.text.paragraph == "newer text"
    assert t.notifications == ()


def test_apply_text_with_unusable_payload_degrades_to_empty_text():
    state = apply_text(default_state(), {"text": "one two"}, seq=1).state
    t = apply_text(state, {"body": "nope"}, seq=2)
    assert t.state.text.words == ()
    assert t.state.current_word is None
    assert t.notifications == (SessionEvent.PARAGRAPH_SET,)


def test_words_per_minute():
    assert words_per_minute(10, 0.0, 60.0) == 10.0
    assert words_per_minute(10, 0.0, 30.0) == 20.0
    assert words_per_minute(5, 100.0, 100.0) == 0.0
    assert math.isnan(words_per_minute(5, None, 100.0))


def test_words_per_minute_non_decreasing_in_correct_count():
    values = [words_per_minute(n, 0.0, 45.0) for n in range(6)]
    assert values == sorted(values)


def test_apply_tick_recomputes_wpm():
    state = apply_event(default_state("a b"), InboundEvent.MATCH, now=0.0).state
    state = apply_submission(state, "a", now=0.0).state
    t = apply_tick(state, now=30.0)
    assert t.state.wpm == 2.0
    assert t.notifications == (SessionEvent.UPDATE,)
