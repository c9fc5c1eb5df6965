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

'''Binding of one method to one matcher and one action sequence.

A binding is what a single stubbing, spying or verification statement
builds. It owns its matcher and its recorded actions until it is
committed; committing hands both over to the method's dispatch table.
'''

from abc import ABCMeta, abstractmethod
import logging

from . import signature
from .actions import ActionSequence, RepeatForever, ReturnValue
from .invocation import StubbingError
from .invocation_matchers import MatchAny, PerArgumentMatch, PredicateMatch


logger = logging.getLogger(__name__)


class MethodContext(metaclass=ABCMeta):
    '''What a binding needs to know about the mocked method it targets.

    The mock implements this; the binding never touches the invocation
    log or the dispatch table directly.
    '''

    @abstractmethod
    def get_original_method(self):
        """Return the method the mock replaces, or ``None``."""

    @abstractmethod
    def get_method_name(self):
        ...

    @abstractmethod
    def set_method_details(self, mock_label, method_label):
        ...

    @abstractmethod
    def add_method_invocation_handler(self, matcher, actions):
        ...

    @abstractmethod
    def remove_method_invocation_handler(self, matcher):
        ...

    @abstractmethod
    def scan_actual_invocations(self, visitor):
        """Call `visitor` with every recorded call of this method."""

    @abstractmethod
    def is_of_method(self, method):
        ...

    @abstractmethod
    def get_involved_mock(self):
        ...

    def get_signature(self):
        """Return an `inspect.Signature` to check arguments against."""
        return None


class StubbingBinding(object):
    def __init__(self, context):
        self._context = context
        self._recorded_actions = ActionSequence()
        self._invocation_matcher = MatchAny()
        self._committed = False
        self._released = False

    @property
    def committed(self):
        return self._committed

    @property
    def released(self):
        return self._released

    @property
    def context(self):
        self._ensure_alive()
        return self._context

    @property
    def invocation_matcher(self):
        self._ensure_alive()
        return self._invocation_matcher

    @property
    def recorded_actions(self):
        """The actions recorded so far; ``None`` once handed over."""
        return self._recorded_actions

    def _ensure_alive(self):
        if self._released:
            raise StubbingError("This binding has already been released.")

    def _ensure_not_committed(self, what):
        self._ensure_alive()
        if self._committed:
            raise StubbingError(
                "Cannot %s after the stubbing of '%s' has been committed."
                % (what, self.format()))

    # CONFIGURATION

    def append_action(self, action):
        self._ensure_not_committed('add an action')
        self._recorded_actions.append(action)

    def set_invocation_matcher(self, matcher):
        self._ensure_not_committed('change the matching criteria')
        previous, self._invocation_matcher = self._invocation_matcher, matcher
        if previous is not matcher:
            previous.release()

    def set_matching_predicate(self, predicate):
        self.set_invocation_matcher(PredicateMatch(predicate))

    def set_matching_arguments(self, params, named_params):
        """Match calls argument by argument.

        Each entry is either a `Matcher` or a concrete example value that
        is compared with ``==``. The arguments are checked against the
        method's signature right away, so a wrong arity fails here and
        not when the mock is called.
        """
        self._ensure_not_committed('change the matching criteria')
        matcher = PerArgumentMatch(params, named_params)
        sig = self._context.get_signature()
        if sig is not None:
            try:
                signature.match_signature_allowing_placeholders(
                    sig, params, named_params)
            except TypeError as e:
                wanted = self._context.get_method_name() + matcher.format()
                matcher.release()
                raise StubbingError(
                    "%s does not fit the signature %s: %s"
                    % (wanted, sig, e)) from e

        self.set_invocation_matcher(matcher)

    def set_method_details(self, mock_label, method_label):
        self._ensure_alive()
        self._context.set_method_details(mock_label, method_label)

    def set_method_body_by_assignment(self, method):
        self.append_action(RepeatForever(method))
        self.commit()

    # LIFECYCLE

    def commit(self):
        self._ensure_not_committed('commit')
        actions = self._recorded_actions
        if not actions:
            actions.append(ReturnValue(None))

        self._context.add_method_invocation_handler(
            self._invocation_matcher, actions)
        self._committed = True
        # The dispatch table owns the actions from now on
        self._recorded_actions = None
        logger.debug("Committed %s with %r", self.format(), actions)

    def uninstall(self):
        """Remove the handler this binding committed."""
        self._ensure_alive()
        if self._committed:
            self._context.remove_method_invocation_handler(
                self._invocation_matcher)

    def release(self):
        """Drop this binding.

        A binding that was never committed still owns its matcher and its
        actions and releases them. After a commit both belong to the
        dispatch table and stay untouched.
        """
        if self._released:
            return
        if not self._committed:
            self._invocation_matcher.release()
            self._recorded_actions.release()
            logger.debug("Released uncommitted %s", self.format())
        self._invocation_matcher = None
        self._recorded_actions = None
        self._released = True

    # QUERIES

    def format(self):
        self._ensure_alive()
        return self._context.get_method_name() + \
            self._invocation_matcher.format()

    def matches(self, invocation):
        """Used by verification only; dispatch never asks a binding."""
        self._ensure_alive()
        if not self._context.is_of_method(invocation.method):
            return False
        return self._invocation_matcher.matches(invocation)

    def get_actual_invocations(self, into):
        self._ensure_alive()

        def scanner(invocation):
            if self._invocation_matcher.matches(invocation):
                into.add(invocation)

        self._context.scan_actual_invocations(scanner)

    def get_involved_mocks(self, into):
        self._ensure_alive()
        into.add(self._context.get_involved_mock())

    def get_original_method(self):
        self._ensure_alive()
        return self._context.get_original_method()

    def __repr__(self):
        if self._released:
            return "<StubbingBinding released>"
        state = 'committed' if self._committed else 'pending'
        return "<StubbingBinding %s %s>" % (self.format(), state)
