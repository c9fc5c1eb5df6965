# Copyright (c) 2008-2016 Szczepan Faber, Serhiy Oplakanets, Herr Kaste
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

import pytest

from mockwork import (
    ArgumentError, InvocationError, StubbingError, VerificationError, any_,
    fake, method, mock, reset, verify, when)


class TestWhen:
    def test_stubs_a_call(self):
        db = mock()
        when(db).get('key').then_return('value')

        assert db.get('key') == 'value'

    def test_other_arguments_return_none(self):
        db = mock()
        when(db).get('key').then_return('value')

        assert db.get('other') is None

    def test_stubs_any_arguments_of_a_context(self):
        db = mock()
        when(method(db).get).then_return('value')

        assert db.get() == 'value'
        assert db.get(1, b=2) == 'value'

    def test_stubs_using_a_predicate(self):
        db = mock()
        when(method(db).get.matching(
            lambda key: key.startswith('user:'))).then_return('user')

        assert db.get('user:1') == 'user'
        assert db.get('group:1') is None

    def test_stubs_with_trailing_ellipsis(self):
        db = mock()
        when(db).put('key', ...).then_return(True)

        assert db.put('key', 1, 2) is True
        assert db.put('key', value=1) is True
        assert db.put('other', 1) is None

    def test_without_actions_returns_none(self):
        db = mock(strict=True)
        when(db).get('key')

        assert db.get('key') is None

    def test_newest_stubbing_wins(self):
        db = mock()
        when(db).get(...).then_return('any')
        when(db).get('key').then_return('key')

        assert db.get('key') == 'key'
        assert db.get('other') == 'any'

    def test_stubbing_is_recorded_for_verification(self):
        db = mock()
        when(db).get('key').then_return('value')
        db.get('key')

        verify(db).get('key')


class TestActions:
    def test_consecutive_values_and_the_last_sticks(self):
        db = mock()
        when(db).get().then_return(1, 2, 3)

        assert [db.get() for _ in range(5)] == [1, 2, 3, 3, 3]

    def test_chained_actions(self):
        db = mock()
        when(db).get().then_return(1).then_raise(KeyError('missing'))

        assert db.get() == 1
        with pytest.raises(KeyError):
            db.get()
        with pytest.raises(KeyError):
            db.get()

    def test_raising_first(self):
        db = mock()
        when(db).get().then_raise(IOError).then_return(1)

        with pytest.raises(IOError):
            db.get()
        assert db.get() == 1

    def test_answer_receives_the_arguments(self):
        db = mock()
        when(db).get(...).then_answer(lambda key, default=None: key.upper())

        assert db.get('a') == 'A'
        assert db.get('b', default=1) == 'B'

    def test_times(self):
        db = mock()
        when(db).get().then_return(1, times=2).then_return(3)

        assert [db.get() for _ in range(4)] == [1, 1, 3, 3]

    def test_times_applies_to_each_value(self):
        db = mock()
        when(db).get().then_return(1, 2, times=2).then_return(3)

        assert [db.get() for _ in range(6)] == [1, 1, 2, 2, 3, 3]

    def test_times_must_be_positive(self):
        db = mock()
        with pytest.raises(StubbingError):
            when(db).get().then_return(1, times=0)

    def test_always_never_advances(self):
        db = mock()
        when(db).get().then_return(1).always_return(2).then_return(3)

        assert [db.get() for _ in range(4)] == [1, 2, 2, 2]

    def test_always_raise_and_answer(self):
        db = mock()
        when(db).get().always_raise(ValueError)
        when(db).put(...).always_answer(lambda *args: len(args))

        for _ in range(2):
            with pytest.raises(ValueError):
                db.get()
        assert db.put(1, 2) == 2

    def test_cannot_call_original_without_one(self):
        db = mock()
        with pytest.raises(StubbingError):
            when(db).get().then_call_original()


class TestCommit:
    def test_calling_the_mock_commits(self):
        db = mock()
        stubbing = when(db).get().then_return(1)
        db.get()

        with pytest.raises(StubbingError):
            stubbing.then_return(2)

    def test_a_new_statement_commits(self):
        db = mock()
        stubbing = when(db).get().then_return(1)
        when(db).put()

        with pytest.raises(StubbingError):
            stubbing.then_return(2)
        assert db.get() == 1

    def test_explicit_commit(self):
        db = mock()
        when(db).get().then_return(1).commit()

        assert db.get() == 1

    def test_with_statement_limits_the_stubbing(self):
        db = mock()
        with when(db).get().then_return(1):
            assert db.get() == 1
        assert db.get() is None

    def test_with_statement_keeps_other_stubbings(self):
        db = mock()
        when(db).get().then_return(0)
        with when(db).get().then_return(1):
            assert db.get() == 1
        assert db.get() == 0


class TestAssignment:
    def test_assigns_a_method_body(self):
        db = mock()
        method(db).get = lambda key: key * 2

        assert db.get(2) == 4
        assert db.get('a') == 'aa'

    def test_assigns_a_value(self):
        db = mock()
        method(db).size = 42

        assert [db.size() for _ in range(3)] == [42, 42, 42]

    def test_assigns_by_name(self):
        db = mock()
        method(db, 'get').assign('value')

        assert db.get() == 'value'

    def test_assignment_is_overridden_by_newer_stubbings(self):
        db = mock()
        method(db).get = 'default'
        when(db).get('key').then_return('value')

        assert db.get('key') == 'value'
        assert db.get('other') == 'default'


class TestFake:
    def test_faked_methods_return_none(self):
        log = mock(strict=True)
        fake(method(log).write, method(log).flush)

        assert log.write('line') is None
        assert log.flush() is None

    def test_other_methods_stay_strict(self):
        log = mock(strict=True)
        fake(method(log).write)

        with pytest.raises(InvocationError):
            log.close()


class TestConfiguredMocks:
    def test_attributes_and_methods(self):
        response = mock({'text': 'ok', 'json': lambda: {'ok': True}})

        assert response.text == 'ok'
        assert response.json() == {'ok': True}

    def test_loose_by_default(self):
        response = mock({'text': 'ok'})

        assert response.raise_for_status() is None


class TestReset:
    def test_reset_drops_stubbings_and_calls(self):
        db = mock()
        when(db).get().then_return(1)
        db.get()

        reset(db)

        assert db.get() is None
        verify(db, times=1).get()

    def test_reset_everything(self):
        db = mock()
        when(db).get(any_()).then_return(1)

        reset()

        with pytest.raises(ArgumentError):
            verify(db).get(1)


class TestMethodDetails:
    def test_labels_show_up_in_format_and_failures(self):
        db = mock()
        context = method(db).get('key').set_method_details('store', 'fetch')

        assert context.format() == "store.fetch('key')"
        with pytest.raises(VerificationError) as exc:
            verify(context)
        assert str(exc.value) == (
            "\nWanted but not invoked:\n\n"
            "    store.fetch('key')\n\n"
            "Instead got:\n\n"
            "    Nothing\n\n"
        )

    def test_empty_mock_label(self):
        db = mock(name='db')
        context = method(db).get('key').set_method_details('', 'fetch')

        assert context.format() == "fetch('key')"
        with pytest.raises(VerificationError) as exc:
            verify(context, times=2)
        assert "    fetch('key')\n" in str(exc.value)

    def test_labels_do_not_change_dispatch(self):
        db = mock()
        when(method(db).get('key').set_method_details('store', 'fetch')) \
            .then_return('value')

        assert db.get('key') == 'value'
        verify(method(db).get('key'))
