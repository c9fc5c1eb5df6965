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

from collections import deque
import functools
import inspect
import logging

from . import signature
from .binding import MethodContext
from .context import MockingContext, finish_ongoing_stubbings
from .invocation import InvocationError, InvocationRecord, MethodIdentity
from .mock_registry import mock_registry
from .sequence import ActualInvocationsSource


__all__ = ['mock']

logger = logging.getLogger(__name__)


class MockMethodContext(MethodContext):
    '''One method of a `Mock`, as seen by a stubbing binding.'''

    def __init__(self, mock, method_name):
        self.mock = mock
        self.method = MethodIdentity(mock, method_name)
        self.label = None

    def get_original_method(self):
        return self.mock.get_original_method(self.method.name)

    def get_method_name(self):
        return self.label or str(self.method)

    def set_method_details(self, mock_label, method_label):
        if mock_label:
            self.label = '%s.%s' % (mock_label, method_label)
        else:
            self.label = method_label

    def add_method_invocation_handler(self, matcher, actions):
        self.mock.add_handler(self.method.name, matcher, actions)

    def remove_method_invocation_handler(self, matcher):
        self.mock.remove_handler(self.method.name, matcher)

    def scan_actual_invocations(self, visitor):
        for invocation in list(self.mock.invocations):
            if invocation.method == self.method:
                visitor(invocation)

    def is_of_method(self, method):
        return method == self.method

    def get_involved_mock(self):
        return self.mock

    def get_signature(self):
        return self.mock.get_signature(self.method.name)


class Mock(ActualInvocationsSource):
    '''Records the calls of one mocked object and answers them.

    Answers come from the per-method dispatch table filled by committed
    stubbings. The newest stubbing whose matcher accepts a call wins.
    '''

    def __init__(self, mocked_obj=None, strict=True, spec=None, name=None,
                 spied=False):
        self.mocked_obj = mocked_obj
        self.strict = strict
        self.spec = spec
        self.name = name
        self.spied = spied

        self.invocations = []
        self.verified_invocations = set()
        self.handlers = {}

        self._signatures_store = {}

    def __repr__(self):
        return "<Mock %s>" % (self.name or self.mocked_obj)

    def context_for(self, method_name):
        if self.strict and not self.has_method(method_name):
            raise InvocationError(
                "You tried to stub or verify a method '%s' the object (%s) "
                "doesn't have." % (method_name, self.spec))
        return MockMethodContext(self, method_name)

    def remember(self, invocation):
        self.invocations.append(invocation)

    def clear_invocations(self):
        self.invocations = []
        self.verified_invocations = set()

    def reset(self):
        self.handlers.clear()
        self.clear_invocations()

    # VERIFICATION

    def mark_verified(self, invocation):
        self.verified_invocations.add(invocation)

    def is_verified(self, invocation):
        return invocation in self.verified_invocations

    def get_actual_invocations(self, into):
        into.update(self.invocations)

    # DISPATCH

    def add_handler(self, method_name, matcher, actions):
        self.handlers.setdefault(method_name, deque()).appendleft(
            (matcher, actions))
        logger.debug(
            "Installed handler %s%s", method_name, matcher.format())

    def remove_handler(self, method_name, matcher):
        handlers = self.handlers.get(method_name, ())
        for entry in list(handlers):
            if entry[0] is matcher:
                handlers.remove(entry)
                logger.debug(
                    "Removed handler %s%s", method_name, matcher.format())

    def handle_call(self, method_name, *params, **named_params):
        finish_ongoing_stubbings()

        if self.strict:
            self.ensure_mocked_object_has_method(method_name)
            self.ensure_signature_matches(method_name, params, named_params)

        invocation = InvocationRecord(
            MethodIdentity(self, method_name), params, named_params)
        self.remember(invocation)

        for matcher, actions in self.handlers.get(method_name, ()):
            if matcher.matches(invocation):
                logger.debug("Dispatching %r", invocation)
                return actions.dispatch(*params, **named_params)

        if self.spied:
            original = self.get_original_method(method_name)
            if original is not None:
                return original(*params, **named_params)

        if self.strict:
            stubbed = [
                "%s%s" % (invocation.method, matcher.format())
                for matcher, _ in self.handlers.get(method_name, ())
            ]
            raise InvocationError(
                """
Called but not expected:

    %s

Stubbed invocations are:

    %s

"""
                % (
                    invocation,
                    "\n    ".join(reversed(stubbed)) or 'Nothing'
                )
            )

        return None

    # SPECCING

    def ensure_mocked_object_has_method(self, method_name):
        if not self.has_method(method_name):
            raise InvocationError(
                "You tried to call a method '%s' the object (%s) doesn't "
                "have." % (method_name, self.spec))

    def ensure_signature_matches(self, method_name, args, kwargs):
        sig = self.get_signature(method_name)
        if not sig:
            return

        signature.match_signature(sig, args, kwargs)

    def get_original_method(self, method_name):
        if self.spec is None:
            return None
        if inspect.isclass(self.spec) and not self.spied:
            return None
        return getattr(self.spec, method_name, None)

    def has_method(self, method_name):
        if self.spec is None:
            return True

        return hasattr(self.spec, method_name)

    def get_signature(self, method_name):
        if self.spec is None:
            return None

        try:
            return self._signatures_store[method_name]
        except KeyError:
            sig = signature.get_signature(self.spec, method_name)
            self._signatures_store[method_name] = sig
            return sig


class _Dummy(object):
    # We spell out `__call__` here for convenience, so `mock`s are
    # callable by default.
    def __call__(self, *args, **kwargs):
        return self.__getattr__('__call__')(*args, **kwargs)


class _OMITTED(object):
    def __repr__(self):
        return 'OMITTED'


OMITTED = _OMITTED()


def mock(config_or_spec=None, spec=None, strict=OMITTED, name=None):
    """Create 'empty' objects ('Mocks').

    Will create an empty unconfigured object, that you can pass
    around. All interactions (method calls) will be recorded and can be
    verified using :func:`verify` et.al.

    A plain `mock()` is not `strict`: every method regardless of the
    arguments returns ``None`` unless stubbed otherwise.

    If you set ``strict=True`` all calls no stubbing accepts raise an
    :class:`InvocationError` instead.

    You can also pass in a dict to pre-configure attributes; functions
    become the body of the method of that name::

        response = mock({'text': 'ok', 'raise_for_status': lambda: None})

    A mock specced against a class, ``mock(requests.Response)``, is strict
    by default. It refuses methods the spec does not have, and arguments
    given in stubbings and calls are checked against the signatures.

    `name` labels the mock in error messages, e.g. ``db.get('key')``.

    """

    if type(config_or_spec) is dict:
        config = config_or_spec
    else:
        config = {}
        spec = config_or_spec

    if strict is OMITTED:
        strict = False if spec is None else True

    class Dummy(_Dummy):
        if inspect.isclass(spec):
            __class__ = spec  # make isinstance work

        def __getattr__(self, method_name):
            if (method_name.startswith('__') and method_name.endswith('__')
                    and method_name != '__call__'):
                raise AttributeError(method_name)
            if strict and not theMock.has_method(method_name):
                raise AttributeError(
                    "'Dummy' has no attribute %r configured" % method_name)
            return functools.partial(theMock.handle_call, method_name)

        def __repr__(self):
            label = 'Dummy'
            if inspect.isclass(spec):
                label += spec.__name__
            return "<%s id=%s>" % (name or label, id(self))

    obj = Dummy()
    theMock = Mock(obj, strict=strict, spec=spec, name=name)

    for n, v in config.items():
        if inspect.isfunction(v):
            MockingContext(theMock.context_for(n)).assign(v)
        else:
            setattr(obj, n, v)

    mock_registry.register(obj, theMock)
    logger.debug("Created %r", theMock)
    return obj
