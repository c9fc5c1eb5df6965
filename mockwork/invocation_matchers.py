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

'''Predicates over recorded invocations.

A stubbing or verification statement uses exactly one of these to decide
which calls of its method it cares about. The method itself is not part
of the decision; the dispatch table is already keyed by method, and the
binding checks the method identity before it asks its matcher.
'''
from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Callable, Dict, Tuple

from typing_extensions import TypeAlias

from .invocation import InvocationRecord, StubbingError, format_params
from .matchers import Matcher, as_matcher
from .utils import callable_name, contains_strict


Predicate: TypeAlias = Callable[..., bool]


class InvocationMatcher(metaclass=ABCMeta):
    @abstractmethod
    def matches(self, invocation: InvocationRecord) -> bool:
        ...

    @abstractmethod
    def format(self) -> str:
        ...

    def release(self) -> None:
        """Called exactly once by the owner that drops this matcher
        without handing it over to a dispatch table."""

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, self.format())


class MatchAny(InvocationMatcher):
    def matches(self, invocation: InvocationRecord) -> bool:
        return True

    def format(self) -> str:
        return '(...)'


class PredicateMatch(InvocationMatcher):
    '''Forwards the complete argument list of a call to `predicate`.'''

    def __init__(self, predicate: Predicate) -> None:
        if not callable(predicate):
            raise StubbingError(
                "predicate must be callable, got %r" % (predicate,))
        self.predicate = predicate

    def matches(self, invocation: InvocationRecord) -> bool:
        return bool(
            self.predicate(*invocation.params, **invocation.named_params))

    def format(self) -> str:
        name = callable_name(self.predicate)
        if name is None:
            return '(<predicate>)'
        return '(<predicate %s>)' % name


class PerArgumentMatch(InvocationMatcher):
    '''One sub-matcher per positional argument and per keyword.

    Plain values are wrapped into equality matchers. A trailing
    ``Ellipsis`` accepts any remaining arguments, keyword arguments
    included.
    '''

    def __init__(self, params=(), named_params=None) -> None:
        named_params = named_params or {}
        if (
            contains_strict(params, Ellipsis)
            and (params[-1] is not Ellipsis or named_params)
        ):
            raise StubbingError(
                'Ellipsis must be the last argument you specify.')
        if contains_strict(named_params.values(), Ellipsis):
            raise StubbingError(
                'Ellipsis cannot be passed as a keyword argument.')

        self.params: Tuple[object, ...] = tuple(
            p if p is Ellipsis else as_matcher(p) for p in params)
        self.named_params: Dict[str, Matcher] = {
            k: as_matcher(v) for k, v in named_params.items()}

    def matches(self, invocation: InvocationRecord) -> bool:
        for x, p1 in enumerate(self.params):
            if p1 is Ellipsis:
                return True

            try:
                p2 = invocation.params[x]
            except IndexError:
                return False

            if not p1.matches(p2):  # type: ignore[union-attr]
                return False

        if len(self.params) != len(invocation.params):
            return False

        if self.named_params.keys() != invocation.named_params.keys():
            return False

        return all(
            matcher.matches(invocation.named_params[key])
            for key, matcher in self.named_params.items()
        )

    def format(self) -> str:
        return format_params(self.params, self.named_params)

    def release(self) -> None:
        self.params = ()
        self.named_params = {}
