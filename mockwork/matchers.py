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

"""Argument matchers for stubbing and verification.

Usually the arguments you give a stubbing or verification statement are
plain values, compared with ``==`` against the actual call::

    when(store).get('user:1').then_return(user)

Where a single concrete value is too strict, put a matcher in its place.
Matchers and plain values can be mixed freely; a trailing ``...`` accepts
whatever arguments remain::

    when(store).get(any_(str)).then_return(None)
    when(store).put('user:1', ...).then_raise(IOError)
    verify(store).put(matches(r'user:\\d+'), not_(None))

A matcher is any object with a ``matches(arg)`` method deriving from
:class:`Matcher`.

"""

import builtins
import re

from .utils import callable_name


__all__ = [
    'and_', 'or_', 'not_',
    'eq', 'neq',
    'lt', 'lte',
    'gt', 'gte',
    'any_', 'ANY',
    'arg_that',
    'contains',
    'matches',
    'captor',
]


class Matcher:
    def matches(self, arg):
        raise NotImplementedError

    def __repr__(self):
        return "<%s>" % type(self).__name__


def as_matcher(value):
    """Return `value` if it is a matcher, otherwise an equality matcher."""
    return value if isinstance(value, Matcher) else Eq(value)


class Any(Matcher):
    def __init__(self, wanted_type=None):
        self.wanted_type = wanted_type

    def matches(self, arg):
        if self.wanted_type:
            return isinstance(arg, self.wanted_type)
        return True

    def __repr__(self):
        if self.wanted_type is None:
            return "<Any>"
        return "<Any: %s>" % getattr(
            self.wanted_type, '__name__', self.wanted_type)


class ValueMatcher(Matcher):
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return "<%s: %r>" % (type(self).__name__, self.value)


class Eq(ValueMatcher):
    def matches(self, arg):
        return arg == self.value

    def __repr__(self):
        return repr(self.value)


class Neq(ValueMatcher):
    def matches(self, arg):
        return arg != self.value


class Lt(ValueMatcher):
    def matches(self, arg):
        return arg < self.value


class Lte(ValueMatcher):
    def matches(self, arg):
        return arg <= self.value


class Gt(ValueMatcher):
    def matches(self, arg):
        return arg > self.value


class Gte(ValueMatcher):
    def matches(self, arg):
        return arg >= self.value


class And(Matcher):
    def __init__(self, matchers):
        self.matchers = [as_matcher(m) for m in matchers]

    def matches(self, arg):
        return builtins.all(m.matches(arg) for m in self.matchers)

    def __repr__(self):
        return "<And: %s>" % self.matchers


class Or(Matcher):
    def __init__(self, matchers):
        self.matchers = [as_matcher(m) for m in matchers]

    def matches(self, arg):
        return builtins.any(m.matches(arg) for m in self.matchers)

    def __repr__(self):
        return "<Or: %s>" % self.matchers


class Not(Matcher):
    def __init__(self, matcher):
        self.matcher = as_matcher(matcher)

    def matches(self, arg):
        return not self.matcher.matches(arg)

    def __repr__(self):
        return "<Not: %s>" % self.matcher


class ArgThat(Matcher):
    def __init__(self, predicate):
        self.predicate = predicate

    def matches(self, arg):
        return bool(self.predicate(arg))

    def __repr__(self):
        return "<ArgThat: %s>" % (
            callable_name(self.predicate) or 'predicate')


class Contains(Matcher):
    def __init__(self, sub):
        self.sub = sub

    def matches(self, arg):
        if self.sub is None or self.sub == '':
            return False
        try:
            return self.sub in arg
        except TypeError:
            return False

    def __repr__(self):
        return "<Contains: %r>" % (self.sub,)


class Matches(Matcher):
    def __init__(self, regex, flags=0):
        self.regex = re.compile(regex, flags)

    def matches(self, arg):
        if not isinstance(arg, str):
            return False
        return self.regex.match(arg) is not None

    def __repr__(self):
        if self.regex.flags & ~re.UNICODE:
            return "<Matches: %s flags=%d>" % (self.regex.pattern,
                                               self.regex.flags)
        return "<Matches: %s>" % self.regex.pattern


class ArgumentCaptor(Matcher):
    '''Matches like its inner matcher and remembers every matched value.

    Every successful `matches` appends, so one call seen by a stubbing and
    again by a verification shows up twice in `all_values`. `value` is
    the latest match either way.
    '''

    def __init__(self, matcher=None):
        self.matcher = as_matcher(matcher) if matcher is not None else Any()
        self.all_values = []

    @property
    def value(self):
        return self.all_values[-1] if self.all_values else None

    def matches(self, arg):
        if not self.matcher.matches(arg):
            return False
        self.all_values.append(arg)
        return True

    def __repr__(self):
        return "<ArgumentCaptor: matcher=%r values=%r>" % (
            self.matcher, self.all_values)


def any_(wanted_type=None):
    """Matches against the type of the argument (`isinstance`).

    Without `wanted_type` every value matches::

        when(cache).get(any_()).then_return(None)
        verify(cache).set(any_(str), any_(int))

    """
    return Any(wanted_type)


ANY = any_


def eq(value):
    """Matches a particular value (`==`)"""
    return Eq(value)


def neq(value):
    """Matches anything but the given value (`!=`)"""
    return Neq(value)


def lt(value):
    return Lt(value)


def lte(value):
    return Lte(value)


def gt(value):
    return Gt(value)


def gte(value):
    return Gte(value)


def and_(*matchers):
    """Matches if all given matchers match

    Example::

        when(parser).feed(and_(any_(str), contains('<')))

    """
    return And(matchers)


def or_(*matchers):
    """Matches if any given matcher matches"""
    return Or(matchers)


def not_(matcher):
    """Matches if the given matcher (or value) does not match"""
    return Not(matcher)


def arg_that(predicate):
    """Matches any argument for which `predicate` returns a true value

    Example::

        verify(pool).resize(arg_that(lambda n: 0 < n <= 8))

    """
    return ArgThat(predicate)


def contains(sub):
    """Matches any container or string holding `sub` (`in`)"""
    return Contains(sub)


def matches(regex, flags=0):
    """Matches any string that matches the given regex"""
    return Matches(regex, flags)


def captor(matcher=None):
    """Return an argument captor for further assertions

    Example::

        key = captor(any_(str))
        when(cache).get(key).then_return(None)
        cache.get('user:1')
        assert key.value == 'user:1'

    The captor records each time it matches. Using the same captor in
    `when` and `verify` records a call once for each of them.

    """
    return ArgumentCaptor(matcher)
