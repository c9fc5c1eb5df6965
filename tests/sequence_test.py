import pytest

from mockwork import method, mock
from mockwork.sequence import ConcatenatedSequence, RepeatedSequence


class TestSequence:
    def test_single_context_is_a_sequence_of_one(self):
        db = mock()
        context = method(db).get

        assert context.size() == 1
        assert context.expected_sequence() == [context]

    def test_concatenation_keeps_declaration_order(self):
        db = mock()
        open_, close = method(db).open, method(db).close
        sequence = open_ + close

        assert isinstance(sequence, ConcatenatedSequence)
        assert sequence.size() == 2
        assert sequence.expected_sequence() == [open_, close]

    def test_concatenation_is_associative_in_order(self):
        db = mock()
        a, b, c = method(db).a, method(db).b, method(db).c

        assert (a + (b + c)).expected_sequence() == [a, b, c]
        assert ((a + b) + c).expected_sequence() == [a, b, c]

    def test_repetition(self):
        db = mock()
        a, b = method(db).a, method(db).b
        sequence = (a + b) * 2

        assert isinstance(sequence, RepeatedSequence)
        assert sequence.size() == 4
        assert sequence.expected_sequence() == [a, b, a, b]
        assert (2 * a).expected_sequence() == [a, a]

    def test_repetition_needs_a_positive_count(self):
        with pytest.raises(ValueError):
            method(mock()).a * 0

    def test_cannot_repeat_by_bool(self):
        with pytest.raises(TypeError):
            method(mock()).a * True

    def test_cannot_add_other_things(self):
        with pytest.raises(TypeError):
            method(mock()).a + 1

    def test_involved_mocks_span_all_parts(self):
        db, log = mock(), mock()
        sequence = method(db).open + method(log).write + method(db).close

        into = set()
        sequence.get_involved_mocks(into)

        assert len(into) == 2

    def test_format(self):
        db = mock()
        sequence = method(db).open('r') + method(db).close()

        assert sequence.format() == "open('r') -> close()"

    def test_actual_invocations_have_no_duplicates(self):
        db = mock()
        db.get(1)
        db.get(2)
        db.put(3)
        get_one = method(db).get(1)
        sequence = get_one + method(db).get + get_one

        into = set()
        sequence.get_actual_invocations(into)

        assert len(into) == 2
        assert all(i.method_name == 'get' for i in into)
