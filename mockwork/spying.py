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

'''Spying on real objects.'''

import inspect
import logging

from .mocking import Mock, _Dummy, mock_registry

__all__ = ['spy']

logger = logging.getLogger(__name__)


def spy(object, name=None):
    """Spy an object.

    Spying means that all methods behave as before, side effects
    included, but the interactions can be verified afterwards, and
    selected calls can be stubbed::

        time = spy(time)
        when(time).time().then_return(0.0)
        do_work(..., time)
        verify(time).sleep(...)

    Calls no stubbing accepts fall through to the real method; stubbings
    can also call it explicitly with ``then_call_original()``.

    Returns a Dummy-like proxy to `object`. The proxy must be injected
    into the code under test; the original object is not patched.

    Attributes that are not callable are read from `object` directly and
    are not recorded.
    """
    if inspect.isclass(object) or inspect.ismodule(object):
        class_ = None
    else:
        class_ = object.__class__

    class Spy(_Dummy):
        if class_:
            __class__ = class_

        def __getattr__(self, method_name):
            value = getattr(object, method_name)
            if not callable(value):
                return value
            return lambda *args, **kwargs: theMock.handle_call(
                method_name, *args, **kwargs)

        def __repr__(self):
            label = 'Spied'
            if class_:
                label += class_.__name__
            return "<%s id=%s>" % (name or label, id(self))

    obj = Spy()
    theMock = Mock(obj, strict=True, spec=object, name=name, spied=True)

    mock_registry.register(obj, theMock)
    logger.debug("Spying on %r", object)
    return obj
