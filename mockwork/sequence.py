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

'''Expectations built from one or more stubbing statements.

`verify` treats a single statement and an ordered chain of statements,
possibly across several mocks, the same way::

    verify(method(db).open + method(log).write('ready') + method(db).close)

'''
from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import List, Set


class ActualInvocationsSource(metaclass=ABCMeta):
    @abstractmethod
    def get_actual_invocations(self, into: Set) -> None:
        """Add every recorded call this source accounts for to `into`."""


class Sequence(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def get_expected_sequence(self, into: List) -> None:
        """Append the invocation matchers in declaration order."""

    @abstractmethod
    def get_involved_mocks(self, into: Set) -> None:
        ...

    def expected_sequence(self) -> List:
        into: List = []
        self.get_expected_sequence(into)
        return into

    def involved_mocks(self) -> Set:
        into: Set = set()
        self.get_involved_mocks(into)
        return into

    def __add__(self, other):
        if not isinstance(other, Sequence):
            return NotImplemented
        return ConcatenatedSequence(self, other)

    def __mul__(self, times):
        if not isinstance(times, int) or isinstance(times, bool):
            return NotImplemented
        return RepeatedSequence(self, times)

    __rmul__ = __mul__


class ConcatenatedSequence(Sequence, ActualInvocationsSource):
    def __init__(self, first: Sequence, second: Sequence) -> None:
        self.first = first
        self.second = second

    def size(self) -> int:
        return self.first.size() + self.second.size()

    def get_expected_sequence(self, into: List) -> None:
        self.first.get_expected_sequence(into)
        self.second.get_expected_sequence(into)

    def get_involved_mocks(self, into: Set) -> None:
        self.first.get_involved_mocks(into)
        self.second.get_involved_mocks(into)

    def get_actual_invocations(self, into: Set) -> None:
        for part in (self.first, self.second):
            if isinstance(part, ActualInvocationsSource):
                part.get_actual_invocations(into)

    def format(self) -> str:
        return " -> ".join(m.format() for m in self.expected_sequence())

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, self.format())


class RepeatedSequence(Sequence, ActualInvocationsSource):
    def __init__(self, sequence: Sequence, times: int) -> None:
        if times < 1:
            raise ValueError(
                "A sequence must be repeated at least once, not %r" % times)
        self.sequence = sequence
        self.times = times

    def size(self) -> int:
        return self.sequence.size() * self.times

    def get_expected_sequence(self, into: List) -> None:
        for _ in range(self.times):
            self.sequence.get_expected_sequence(into)

    def get_involved_mocks(self, into: Set) -> None:
        self.sequence.get_involved_mocks(into)

    def get_actual_invocations(self, into: Set) -> None:
        if isinstance(self.sequence, ActualInvocationsSource):
            self.sequence.get_actual_invocations(into)

    def format(self) -> str:
        return " -> ".join(m.format() for m in self.expected_sequence())

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, self.format())
