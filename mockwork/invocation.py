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

'''Recorded calls on mocked methods.'''

from collections import namedtuple
import itertools


class InvocationError(AttributeError):
    pass


class StubbingError(Exception):
    """A stubbing or verification statement was configured wrongly."""


class MethodIdentity(namedtuple('MethodIdentity', 'mock name')):
    '''Identifies one method on one mock; used as an equality key only.'''

    __slots__ = ()

    def __str__(self):
        label = getattr(self.mock, 'name', None)
        if label:
            return '%s.%s' % (label, self.name)
        return self.name


def format_params(params, named_params):
    args = [repr(p) if p is not Ellipsis else '...' for p in params]
    kwargs = ["%s=%r" % (key, val) for key, val in named_params.items()]
    return "(%s)" % ", ".join(args + kwargs)


# Shared by all mocks so histories of different mocks can be merged.
_sequence_numbers = itertools.count(1)


class InvocationRecord(object):
    '''The fact that `method` was called with the given arguments.

    Records are created by the mock when a call comes in and are never
    changed afterwards. `sequence_number` grows monotonically across all
    mocks, so records from several mocks can be sorted into call order.

    Records compare and hash by identity: two calls with equal arguments
    are still two distinct facts.
    '''

    __slots__ = ('method', 'params', 'named_params', 'sequence_number')

    def __init__(self, method, params=(), named_params=None):
        self.method = method
        self.params = tuple(params)
        self.named_params = dict(named_params or {})
        self.sequence_number = next(_sequence_numbers)

    def __setattr__(self, name, value):
        # `sequence_number` is assigned last in `__init__`
        if hasattr(self, 'sequence_number'):
            raise AttributeError(
                "'%s' is read-only on a recorded invocation" % name)
        super(InvocationRecord, self).__setattr__(name, value)

    @property
    def mock(self):
        return self.method.mock

    @property
    def method_name(self):
        return self.method.name

    def __repr__(self):
        return "%s%s" % (
            self.method, format_params(self.params, self.named_params))
