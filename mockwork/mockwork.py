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

from . import verification
from .context import MockingContext, StubbingProgress, finish_ongoing_stubbings
from .mocking import Mock
from .mock_registry import mock_registry
from .sequence import ActualInvocationsSource, Sequence


logger = logging.getLogger(__name__)


class ArgumentError(Exception):
    pass


def _multiple_arguments_in_use(*args):
    return len([x for x in args if x is not None]) > 1


def _invalid_argument(value):
    return value is not None and value < 1


def _invalid_between(between):
    if between is not None:
        try:
            start, end = between
        except Exception:
            return True

        if start > end or start < 0:
            return True
    return False


def _get_wanted_verification(
        times=None, atleast=None, atmost=None, between=None):
    if times is not None and times < 0:
        raise ArgumentError("'times' argument has invalid value.\n"
                            "It should be at least 0. You wanted to set it to:"
                            " %i" % times)
    if _multiple_arguments_in_use(times, atleast, atmost, between):
        raise ArgumentError(
            "You can set only one of the arguments: 'times', 'atleast', "
            "'atmost' or 'between'.")
    if _invalid_argument(atleast):
        raise ArgumentError("'atleast' argument has invalid value.\n"
                            "It should be at least 1.  You wanted to set it "
                            "to: %i" % atleast)
    if _invalid_argument(atmost):
        raise ArgumentError("'atmost' argument has invalid value.\n"
                            "It should be at least 1.  You wanted to set it "
                            "to: %i" % atmost)
    if _invalid_between(between):
        raise ArgumentError(
            """'between' argument has invalid value.
It should consist of positive values with second number not greater
than first e.g. (1, 4) or (0, 3) or (2, 2).
You wanted to set it to: %s""" % (between,))

    if atleast:
        return verification.AtLeast(atleast)
    elif atmost:
        return verification.AtMost(atmost)
    elif between:
        return verification.Between(*between)
    elif times is not None:
        return verification.Times(times)
    return verification.AtLeast(1)


def _get_mock_or_raise(obj):
    if isinstance(obj, Mock):
        return obj
    theMock = mock_registry.mock_for(obj)
    if theMock is None:
        raise ArgumentError("obj '%s' is not registered" % obj)
    return theMock


class _Methods(object):
    def __init__(self, theMock):
        object.__setattr__(self, '_mock', theMock)

    def __getattr__(self, method_name):
        return MockingContext(self._mock.context_for(method_name))

    def __setattr__(self, method_name, method_or_value):
        self.__getattr__(method_name).assign(method_or_value)


def method(obj, method_name=None):
    """Address a method of a mock, e.g. to stub or verify it.

    Two ways to call this::

        method(db).get              # all calls of `db.get`
        method(db, 'get')           # same
        method(db).get('user:1')    # calls with these arguments

    The result is a :class:`MockingContext`. Hand it to :func:`when` or
    :func:`verify`, or chain several with ``+`` to express an order.

    Assigning to an attribute replaces the method body for all calls::

        method(db).get = lambda key: key.upper()
        method(db).size = 42

    """
    theMock = _get_mock_or_raise(obj)
    methods = _Methods(theMock)
    if method_name is None:
        return methods
    return getattr(methods, method_name)


def when(obj):
    """Central interface to stub methods

    `obj` is either a :class:`MockingContext`, as returned by
    :func:`method`, or a mock. In the latter case the method and the
    arguments follow in fluent style::

        when(method(db).get).then_return(None)        # any arguments
        when(db).get('user:1').then_return(user)      # exactly these

    The returned :class:`StubbingProgress` takes the answers in order; the
    last answer sticks for all further calls::

        when(db).get('user:1').then_return(None, user).then_raise(IOError)

    The stubbing becomes active as soon as the mock is used, or a new
    statement starts. Use ``with`` to limit it to a block::

        with when(db).get(...).then_return(None):
            ...

    """
    finish_ongoing_stubbings()

    if isinstance(obj, MockingContext):
        return StubbingProgress(obj)

    theMock = _get_mock_or_raise(obj)

    class When(object):
        def __getattr__(self, method_name):
            def stub(*args, **kwargs):
                context = MockingContext(theMock.context_for(method_name))
                return StubbingProgress(context.using(*args, **kwargs))
            return stub

    return When()


def fake(*contexts):
    """Let the given methods do nothing and return ``None``.

    E.g.::

        fake(method(log).write, method(log).flush)

    """
    finish_ongoing_stubbings()
    for context in contexts:
        context.assign(None)


def verify(*objs, times=None, atleast=None, atmost=None, between=None):
    """Central interface to verify interactions.

    Pass one or more sequences; each is verified on its own::

        verify(method(db).get('user:1'))
        verify(method(db).open + method(db).close, times=1)
        verify(method(db).open, method(log).write)

    A sequence built with ``+`` must have happened in that order; calls
    in between do not matter, but each call counts for one step only.
    Without a count, a sequence must have happened at least once.

    `verify` also has a fluent form for a single mock::

        verify(db, times=2).get('user:1')

    All failures of one `verify` are raised together as a single
    :class:`VerificationError`.

    """
    if not objs:
        raise ArgumentError("Nothing to verify.")

    finish_ongoing_stubbings()
    verification_fn = _get_wanted_verification(
        times=times, atleast=atleast, atmost=atmost, between=between)

    if len(objs) == 1 and not isinstance(objs[0], Sequence):
        theMock = _get_mock_or_raise(objs[0])

        class Verify(object):
            def __getattr__(self, method_name):
                def check(*args, **kwargs):
                    context = MockingContext(theMock.context_for(method_name))
                    try:
                        context.using(*args, **kwargs)
                        verification.verify_sequences(
                            [context], verification_fn)
                    finally:
                        context.release()
                return check

        return Verify()

    for obj in objs:
        if not isinstance(obj, Sequence):
            raise ArgumentError("'%s' is not a sequence to verify" % (obj,))
    verification.verify_sequences(objs, verification_fn)


def verify_no_other_invocations(*objs):
    """Ensure all calls on the given mocks or sequences were verified.

    Pass mocks to check all of their calls, or sequences to check only the
    calls they match::

        verify(method(db).get)
        verify_no_other_invocations(db)   # fails if e.g. db.put was called

    """
    finish_ongoing_stubbings()
    sources = []
    for obj in objs:
        if isinstance(obj, ActualInvocationsSource):
            sources.append(obj)
        else:
            sources.append(_get_mock_or_raise(obj))
    verification.verify_no_other_invocations(sources)


def forget_invocations(*objs):
    """Forget all invocations of given objs.

    If you already *call* mocks during your setup routine, you can call
    ``forget_invocations`` at the end of your setup, and have a clean
    'recording' for your actual test code.
    """
    for obj in objs:
        theMock = _get_mock_or_raise(obj)
        theMock.clear_invocations()


def reset(*objs):
    """Drop all stubbings and recorded calls.

    Without arguments *all* registered mocks are reset and forgotten.
    """
    finish_ongoing_stubbings()
    if objs:
        for obj in objs:
            _get_mock_or_raise(obj).reset()
    else:
        mock_registry.unregister_all()
        logger.debug("Reset all mocks")
