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

'''Mockwork stubs and verifies calls on mock objects.'''

import logging

from .mockwork import (
    method, when, fake, verify, verify_no_other_invocations,
    forget_invocations, reset, ArgumentError)
from .spying import spy
from .mocking import mock
from .context import MockingContext, StubbingProgress
from .binding import MethodContext, StubbingBinding
from .sequence import Sequence, ActualInvocationsSource
from .invocation import InvocationError, StubbingError
from .verification import VerificationError

from . import matchers
from .matchers import *  # noqa: F403
from .verification import never

__version__ = '1.0.0'

__all__ = ['mock', 'spy', 'method', 'when', 'fake', 'verify',
           'verify_no_other_invocations', 'forget_invocations', 'reset',
           'MockingContext', 'StubbingProgress', 'MethodContext',
           'StubbingBinding', 'Sequence', 'ActualInvocationsSource',
           'VerificationError', 'ArgumentError', 'InvocationError',
           'StubbingError',
           'never',
           ] + matchers.__all__

logging.getLogger(__name__).addHandler(logging.NullHandler())
