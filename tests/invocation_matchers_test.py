import pytest

from mockwork import any_, gt, StubbingError
from mockwork.invocation import InvocationRecord, MethodIdentity
from mockwork.invocation_matchers import (
    MatchAny, PerArgumentMatch, PredicateMatch)


def call(*args, **kwargs):
    return InvocationRecord(MethodIdentity(None, 'foo'), args, kwargs)


class TestMatchAny:
    def test_matches_every_call(self):
        matcher = MatchAny()
        assert matcher.matches(call())
        assert matcher.matches(call(1, 2, key='value'))

    def test_format(self):
        assert MatchAny().format() == '(...)'


class TestPredicateMatch:
    def test_forwards_all_arguments(self):
        seen = []

        def predicate(*args, **kwargs):
            seen.append((args, kwargs))
            return True

        assert PredicateMatch(predicate).matches(call(1, b=2))
        assert seen == [((1,), {'b': 2})]

    def test_uses_truthiness_of_the_result(self):
        matcher = PredicateMatch(lambda x: x)
        assert matcher.matches(call(1))
        assert not matcher.matches(call(0))

    def test_predicate_must_be_callable(self):
        with pytest.raises(StubbingError):
            PredicateMatch(42)

    def test_format_names_the_predicate(self):
        def is_small(x):
            return x < 10

        assert PredicateMatch(is_small).format() == '(<predicate is_small>)'
        assert PredicateMatch(lambda x: x).format() == '(<predicate>)'


class TestPerArgumentMatch:
    def test_compares_plain_values(self):
        matcher = PerArgumentMatch((1, 'a'), {'key': None})
        assert matcher.matches(call(1, 'a', key=None))
        assert not matcher.matches(call(1, 'b', key=None))

    def test_arity_must_match(self):
        matcher = PerArgumentMatch((1,))
        assert not matcher.matches(call())
        assert not matcher.matches(call(1, 2))

    def test_keywords_must_match(self):
        matcher = PerArgumentMatch((), {'a': 1})
        assert not matcher.matches(call())
        assert not matcher.matches(call(a=1, b=2))
        assert not matcher.matches(call(a=2))
        assert matcher.matches(call(a=1))

    def test_no_arguments_only_match_calls_without_arguments(self):
        matcher = PerArgumentMatch()
        assert matcher.matches(call())
        assert not matcher.matches(call(1))
        assert not matcher.matches(call(a=1))

    def test_mixes_matchers_and_values(self):
        matcher = PerArgumentMatch((any_(str), gt(5)))
        assert matcher.matches(call('x', 6))
        assert not matcher.matches(call(1, 6))
        assert not matcher.matches(call('x', 5))

    def test_trailing_ellipsis_accepts_the_rest(self):
        matcher = PerArgumentMatch((1, Ellipsis))
        assert matcher.matches(call(1))
        assert matcher.matches(call(1, 2, 3, key='value'))
        assert not matcher.matches(call(2, 1))
        assert not matcher.matches(call())

    def test_ellipsis_must_be_last(self):
        with pytest.raises(StubbingError):
            PerArgumentMatch((Ellipsis, 1))

    def test_ellipsis_excludes_keywords(self):
        with pytest.raises(StubbingError):
            PerArgumentMatch((Ellipsis,), {'a': 1})
        with pytest.raises(StubbingError):
            PerArgumentMatch((), {'a': Ellipsis})

    def test_format(self):
        assert PerArgumentMatch((1, 'a'), {'k': 2}).format() == \
            "(1, 'a', k=2)"
        assert PerArgumentMatch((1, Ellipsis)).format() == "(1, ...)"
        assert PerArgumentMatch((any_(int),)).format() == "(<Any: int>)"
