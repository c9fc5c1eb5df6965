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

'''The statement-level surface on top of a `StubbingBinding`.'''

import logging

from .actions import (
    RepeatForever, RepeatTimes, ReturnValue, RunCallback, ThrowError)
from .binding import StubbingBinding
from .invocation import StubbingError
from .sequence import ActualInvocationsSource, Sequence


logger = logging.getLogger(__name__)

# Stubbing statements that may still receive actions. Python has no hook
# for "end of statement", so they get committed as soon as anything else
# touches a mock.
_ongoing_stubbings = []


def finish_ongoing_stubbings():
    """Commit every stubbing statement that is still being written."""
    while _ongoing_stubbings:
        progress = _ongoing_stubbings.pop(0)
        binding = progress.context.binding
        if not (binding.committed or binding.released):
            logger.debug("Finishing ongoing stubbing %s", binding.format())
            binding.commit()


class MockingContext(Sequence, ActualInvocationsSource):
    '''One method of one mock, plus the criteria selecting its calls.

    Calling the context, or `using`, narrows it down to calls with the
    given arguments; `matching` takes a predicate over all arguments::

        method(db).get('user:1')
        method(db).get.using(any_(str))
        method(db).get.matching(lambda key, **kw: key.startswith('user:'))

    A context is a one-element `Sequence`; chain contexts with ``+`` to
    verify an order of calls.
    '''

    def __init__(self, method_context):
        self._binding = StubbingBinding(method_context)

    @property
    def binding(self):
        return self._binding

    def set_method_details(self, mock_label, method_label):
        self._binding.set_method_details(mock_label, method_label)
        return self

    def using(self, *args, **kwargs):
        self._binding.set_matching_arguments(args, kwargs)
        return self

    __call__ = using

    def matching(self, predicate):
        self._binding.set_matching_predicate(predicate)
        return self

    def assign(self, method_or_value):
        """Replace the method body for every call: a callable receives the
        arguments, any other value is returned as is."""
        finish_ongoing_stubbings()
        self._binding.set_method_body_by_assignment(method_or_value)

    def append_action(self, action):
        self._binding.append_action(action)

    def commit(self):
        self._binding.commit()

    def release(self):
        self._binding.release()

    def get_original_method(self):
        return self._binding.get_original_method()

    # Sequence

    def size(self):
        return 1

    def get_expected_sequence(self, into):
        into.append(self)

    def get_involved_mocks(self, into):
        self._binding.get_involved_mocks(into)

    # ActualInvocationsSource

    def get_actual_invocations(self, into):
        self._binding.get_actual_invocations(into)

    # Matcher, used by verification

    def matches(self, invocation):
        return self._binding.matches(invocation)

    def format(self):
        return self._binding.format()

    def __repr__(self):
        return "<MockingContext %s>" % self.format()


class StubbingProgress(object):
    '''Collects the behaviors of one stubbing statement.

    Actions are consumed in the order given; the last one sticks::

        when(method(db).get).then_return(None, user).then_raise(IOError)

    answers `None`, then `user`, then raises on every further call.

    Used as a context manager the stub is committed on enter and removed
    again on exit.
    '''

    def __init__(self, context):
        self.context = context
        _ongoing_stubbings.append(self)

    def then_return(self, *return_values, times=None):
        for return_value in return_values:
            self.__then(ReturnValue(return_value), times)
        return self

    def then_raise(self, *exceptions, times=None):
        for exception in exceptions:
            self.__then(ThrowError(exception), times)
        return self

    def then_answer(self, *callables, times=None):
        for fn in callables:
            self.__then(RunCallback(fn), times)
        return self

    def then_call_original(self, times=None):
        self.__then(RunCallback(self.__original()), times)
        return self

    def always_return(self, value):
        self.context.append_action(RepeatForever(ReturnValue(value)))
        return self

    def always_raise(self, exception):
        self.context.append_action(RepeatForever(ThrowError(exception)))
        return self

    def always_answer(self, fn):
        self.context.append_action(RepeatForever(RunCallback(fn)))
        return self

    def always_call_original(self):
        self.context.append_action(
            RepeatForever(RunCallback(self.__original())))
        return self

    def commit(self):
        if self in _ongoing_stubbings:
            _ongoing_stubbings.remove(self)
        self.context.commit()

    def __original(self):
        original = self.context.get_original_method()
        if original is None:
            raise StubbingError(
                "'%s' has no original method to call." % self.context.format())
        return original

    def __then(self, action, times):
        if times is not None:
            action = RepeatTimes(action, times)
        self.context.append_action(action)

    def __enter__(self):
        binding = self.context.binding
        if not binding.committed:
            self.commit()
        return self

    def __exit__(self, *exc_info):
        self.context.binding.uninstall()
