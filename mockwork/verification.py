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

import logging
from operator import attrgetter

__all__ = ['never', 'VerificationError']

logger = logging.getLogger(__name__)


class VerificationError(AssertionError):
    '''Indicates error during verification of invocations.

    Raised if verification fails. Error message contains the cause.
    '''
    pass


class AtLeast(object):
    def __init__(self, wanted_count):
        self.wanted_count = wanted_count

    def verify(self, report, actual_count):
        if actual_count >= self.wanted_count:
            return
        if actual_count == 0:
            raise VerificationError(report.not_invoked())
        raise VerificationError(report.too_few(
            "Wanted at least: %i, actual times: %i"
            % (self.wanted_count, actual_count)))

    def __repr__(self):
        return "<%s wanted=%s>" % (type(self).__name__, self.wanted_count)


class AtMost(object):
    def __init__(self, wanted_count):
        self.wanted_count = wanted_count

    def verify(self, report, actual_count):
        if actual_count > self.wanted_count:
            raise VerificationError(report.too_many(
                "Wanted at most: %i, actual times: %i"
                % (self.wanted_count, actual_count)))

    def __repr__(self):
        return "<%s wanted=%s>" % (type(self).__name__, self.wanted_count)


class Between(object):
    def __init__(self, wanted_from, wanted_to):
        self.wanted_from = wanted_from
        self.wanted_to = wanted_to

    def verify(self, report, actual_count):
        if self.wanted_from <= actual_count <= self.wanted_to:
            return
        if actual_count == 0:
            raise VerificationError(report.not_invoked())
        text = "Wanted between: [%i, %i], actual times: %i" % (
            self.wanted_from, self.wanted_to, actual_count)
        if actual_count < self.wanted_from:
            raise VerificationError(report.too_few(text))
        raise VerificationError(report.too_many(text))

    def __repr__(self):
        return "<%s [%s, %s]>" % (
            type(self).__name__, self.wanted_from, self.wanted_to)


class Times(object):
    def __init__(self, wanted_count):
        self.wanted_count = wanted_count

    def verify(self, report, actual_count):
        if actual_count == self.wanted_count:
            return
        if actual_count == 0:
            raise VerificationError(report.not_invoked())
        if self.wanted_count == 0:
            raise VerificationError(
                "\nUnwanted invocation of %s, times: %i"
                % (report.wanted, actual_count))
        text = "Wanted times: %i, actual times: %i" % (
            self.wanted_count, actual_count)
        if actual_count < self.wanted_count:
            raise VerificationError(report.too_few(text))
        raise VerificationError(report.too_many(text))


never = 0


def collect_history(sequence):
    """Return all calls on the mocks `sequence` involves, in call order."""
    into = set()
    for mock in sequence.involved_mocks():
        mock.get_actual_invocations(into)
    return sorted(into, key=attrgetter('sequence_number'))


def find_occurrences(expected, history):
    """Match `expected` against `history` greedily, left to right.

    Every occurrence is a list of calls, one per matcher, in increasing
    call order; no call is used twice. Returns the complete occurrences
    and the calls matched by the final, incomplete attempt.
    """
    occurrences = []
    if not expected:
        return occurrences, []

    position = 0
    while True:
        matched = []
        for matcher in expected:
            while (position < len(history)
                   and not matcher.matches(history[position])):
                position += 1
            if position == len(history):
                return occurrences, matched
            matched.append(history[position])
            position += 1
        occurrences.append(matched)


class SequenceReport(object):
    '''Describes what a sequence wanted and what actually happened.'''

    def __init__(self, expected, history, partial):
        self.expected = expected
        self.history = history
        self.partial = partial

    @property
    def wanted(self):
        return " -> ".join(matcher.format() for matcher in self.expected)

    @property
    def unsatisfied(self):
        return self.expected[len(self.partial)]

    def _unsatisfied_section(self):
        if len(self.expected) < 2:
            return ""
        if self.partial:
            return "Unsatisfied: %s after %r\n\n" % (
                self.unsatisfied.format(), self.partial[-1])
        return "Unsatisfied: %s\n\n" % self.unsatisfied.format()

    def not_invoked(self):
        message = "\nWanted but not invoked:\n\n    %s\n\n" % self.wanted
        message += self._unsatisfied_section()
        message += "Instead got:\n\n    %s\n\n" % (
            "\n    ".join(repr(i) for i in self.history) or 'Nothing')
        return message

    def too_few(self, counts):
        """`counts` plus the sequence and the step the next occurrence
        got stuck at."""
        return "\n%s\n\n    %s\n\n%s" % (
            counts, self.wanted, self._unsatisfied_section())

    def too_many(self, counts):
        return "\n%s\n\n    %s\n\n" % (counts, self.wanted)


def verify_sequence(sequence, verification):
    """Check `sequence` against the calls of its mocks.

    On success the calls used are marked verified on their mocks and
    returned, one list per occurrence.
    """
    expected = sequence.expected_sequence()
    history = collect_history(sequence)
    occurrences, partial = find_occurrences(expected, history)

    verification.verify(
        SequenceReport(expected, history, partial), len(occurrences))

    for occurrence in occurrences:
        for invocation in occurrence:
            invocation.mock.mark_verified(invocation)
    logger.debug("Verified %r: %i occurrence(s)", sequence, len(occurrences))
    return occurrences


def verify_sequences(sequences, verification):
    """Verify each of `sequences`, reporting all failures at once."""
    failures = []
    for sequence in sequences:
        try:
            verify_sequence(sequence, verification)
        except VerificationError as e:
            failures.append(str(e))

    if len(failures) == 1:
        raise VerificationError(failures[0])
    if failures:
        raise VerificationError(
            "\n%i of %i verifications failed:\n%s"
            % (len(failures), len(sequences), "".join(failures)))


def verify_no_other_invocations(sources):
    """Fail if any call the `sources` account for is not verified yet."""
    into = set()
    for source in sources:
        source.get_actual_invocations(into)

    unverified = sorted(
        (i for i in into if not i.mock.is_verified(i)),
        key=attrgetter('sequence_number'))

    if len(unverified) == 1:
        raise VerificationError("\nUnwanted interaction: %s" % unverified[0])
    if unverified:
        raise VerificationError(
            "\nUnwanted interactions:\n\n    %s\n\n"
            % "\n    ".join(repr(i) for i in unverified))
