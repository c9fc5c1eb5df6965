import pytest
from parameterized import parameterized as p
from unittest import TestCase

from mockwork.actions import (
    ActionSequence, NoMoreRecordedActionError, RepeatForever, RepeatTimes,
    ReturnValue, RunCallback, ThrowError, as_action)
from mockwork.invocation import StubbingError


def run(sequence, calls, *args, **kwargs):
    return [sequence.dispatch(*args, **kwargs) for _ in range(calls)]


def sequence_of(*actions):
    sequence = ActionSequence()
    for action in actions:
        sequence.append(action)
    return sequence


class StickyTerminalActionTest(TestCase):
    @p.expand([
        ('one', [1], 4, [1, 1, 1, 1]),
        ('two', [1, 2], 5, [1, 2, 2, 2, 2]),
        ('three', [1, 2, 3], 3, [1, 2, 3]),
        ('fewer_calls', [1, 2, 3], 2, [1, 2]),
        ('more_calls', [1, 2, 3], 6, [1, 2, 3, 3, 3, 3]),
    ])
    def test_kth_call_dispatches_min_k_n(self, _, values, calls, expected):
        sequence = sequence_of(*[ReturnValue(v) for v in values])
        self.assertEqual(expected, run(sequence, calls))


class TestActionSequence:
    def test_empty_sequence_fails_fast(self):
        with pytest.raises(NoMoreRecordedActionError):
            ActionSequence().dispatch()

    def test_raising_action_is_consumed(self):
        sequence = sequence_of(ThrowError(ValueError('boom')), ReturnValue(2))

        with pytest.raises(ValueError):
            sequence.dispatch()
        assert sequence.dispatch() == 2
        assert sequence.dispatch() == 2

    def test_terminal_raise_keeps_raising(self):
        sequence = sequence_of(ReturnValue(1), ThrowError(KeyError))

        assert sequence.dispatch() == 1
        for _ in range(3):
            with pytest.raises(KeyError):
                sequence.dispatch()

    def test_callbacks_receive_the_arguments(self):
        sequence = sequence_of(RunCallback(lambda a, b=0: a + b))

        assert sequence.dispatch(1, b=2) == 3
        assert sequence.dispatch(5) == 5

    def test_repeat_times_behaves_like_n_copies(self):
        sequence = sequence_of(
            ReturnValue(1), RepeatTimes(ReturnValue(2), 2), ReturnValue(3))

        assert run(sequence, 6) == [1, 2, 2, 3, 3, 3]

    def test_terminal_repeat_times_sticks(self):
        sequence = sequence_of(RepeatTimes(ReturnValue(2), 2))

        assert run(sequence, 4) == [2, 2, 2, 2]

    def test_repeat_forever_never_advances(self):
        sequence = sequence_of(RepeatForever(ReturnValue(1)), ReturnValue(2))

        assert run(sequence, 3) == [1, 1, 1]
        assert len(sequence) == 2

    def test_repeat_times_is_one_unit(self):
        sequence = sequence_of(RepeatTimes(ReturnValue(2), 3))

        assert len(sequence) == 1
        assert repr(list(sequence)[0]) == \
            "<RepeatTimes <ReturnValue 2> times=3>"

    def test_repeat_times_needs_a_positive_count(self):
        with pytest.raises(StubbingError):
            RepeatTimes(ReturnValue(2), 0)

    def test_released_sequence_is_empty_and_refuses_actions(self):
        sequence = sequence_of(ReturnValue(1))
        sequence.release()

        assert len(sequence) == 0
        with pytest.raises(StubbingError):
            sequence.append(ReturnValue(2))
        with pytest.raises(NoMoreRecordedActionError):
            sequence.dispatch()


class TestAsAction:
    def test_wraps_callables_into_callbacks(self):
        action = as_action(lambda: 'called')
        assert isinstance(action, RunCallback)
        assert action() == 'called'

    def test_wraps_values_into_return_values(self):
        action = as_action(42)
        assert isinstance(action, ReturnValue)
        assert action() == 42

    def test_keeps_actions(self):
        action = ThrowError(ValueError())
        assert as_action(action) is action

    def test_repeat_forever_accepts_plain_callables(self):
        action = RepeatForever(lambda x: x * 2)
        assert action(21) == 42
        assert not action.is_done
