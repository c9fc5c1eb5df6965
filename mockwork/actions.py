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

'''Behaviors a stubbed method performs on successive matched calls.'''

from collections import deque
import logging

from .invocation import StubbingError
from .utils import callable_name


logger = logging.getLogger(__name__)


class NoMoreRecordedActionError(StubbingError):
    pass


class Action(object):
    '''One recorded behavior.

    Calling an action performs it once. `is_done` tells the owning
    sequence whether it may advance to the next action.
    '''

    def __init__(self):
        #: How many times this action has been performed.
        self.invoked = 0

    def __call__(self, *args, **kwargs):
        self.invoked += 1
        return self.perform(*args, **kwargs)

    def perform(self, *args, **kwargs):
        raise NotImplementedError

    @property
    def is_done(self):
        return self.invoked >= 1


class ReturnValue(Action):
    def __init__(self, value):
        super(ReturnValue, self).__init__()
        self.value = value

    def perform(self, *args, **kwargs):
        return self.value

    def __repr__(self):
        return "<ReturnValue %r>" % (self.value,)


class ThrowError(Action):
    def __init__(self, exception):
        super(ThrowError, self).__init__()
        self.exception = exception

    def perform(self, *args, **kwargs):
        raise self.exception

    def __repr__(self):
        return "<ThrowError %r>" % (self.exception,)


class RunCallback(Action):
    def __init__(self, fn):
        super(RunCallback, self).__init__()
        self.fn = fn

    def perform(self, *args, **kwargs):
        return self.fn(*args, **kwargs)

    def __repr__(self):
        return "<RunCallback %s>" % (callable_name(self.fn) or 'callable')


def as_action(value):
    """Wrap `value` into an action; callables become callbacks."""
    if isinstance(value, Action):
        return value
    if callable(value):
        return RunCallback(value)
    return ReturnValue(value)


class RepeatForever(Action):
    def __init__(self, action):
        super(RepeatForever, self).__init__()
        self.action = as_action(action)

    def perform(self, *args, **kwargs):
        return self.action(*args, **kwargs)

    @property
    def is_done(self):
        return False

    def __repr__(self):
        return "<RepeatForever %r>" % (self.action,)


class RepeatTimes(Action):
    '''Performs `action` `times` times, as one unit of the sequence.'''

    def __init__(self, action, times):
        if times < 1:
            raise StubbingError(
                "'times' should be at least 1. You wanted to set it to: %s"
                % times)
        super(RepeatTimes, self).__init__()
        self.action = as_action(action)
        self.times = times

    def perform(self, *args, **kwargs):
        return self.action(*args, **kwargs)

    @property
    def is_done(self):
        return self.invoked >= self.times

    def __repr__(self):
        return "<RepeatTimes %r times=%i>" % (self.action, self.times)


class ActionSequence(object):
    '''Ordered actions, consumed front to back.

    The last remaining action is never removed: whatever was configured
    last becomes the steady-state behavior of the stub.
    '''

    def __init__(self):
        self.actions = deque()
        self.released = False

    def __len__(self):
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    def append(self, action):
        if self.released:
            raise StubbingError("Action sequence has already been released.")
        self.actions.append(action)

    def dispatch(self, *args, **kwargs):
        if not self.actions:
            raise NoMoreRecordedActionError(
                "No action recorded for this call. "
                "Configure at least one behavior before calling.")

        action = self.actions[0]
        try:
            return action(*args, **kwargs)
        finally:
            # Also consumed if the action raised
            if len(self.actions) > 1 and action.is_done:
                self.actions.popleft()
                logger.debug("Advanced past %r", action)

    def release(self):
        self.actions.clear()
        self.released = True

    def __repr__(self):
        return "<ActionSequence %s>" % list(self.actions)
