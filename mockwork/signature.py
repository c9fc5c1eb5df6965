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

from .utils import contains_strict

import functools
import inspect
from inspect import Parameter


def get_signature(obj, method_name):
    try:
        method = getattr(obj, method_name)
    except AttributeError:
        return None

    # Eat self for unbound methods bc signature doesn't do it
    if (inspect.isclass(obj) and
            inspect.isfunction(method) and
            not isinstance(
                inspect.getattr_static(obj, method_name, None),
                staticmethod)):
        method = functools.partial(method, None)

    try:
        return inspect.signature(method)
    except (TypeError, ValueError):
        return None


def match_signature(sig, args, kwargs):
    sig.bind(*args, **kwargs)
    return sig


def match_signature_allowing_placeholders(sig, args, kwargs):
    """Bind `args` and `kwargs`, where a trailing `...` may stand in for
    any number of remaining arguments.

    Raises `TypeError` if the arguments cannot fit the signature.
    """
    if contains_strict(args, Ellipsis):
        # Ellipsis as the sole argument fits every signature
        if len(args) == 1:
            return sig

        has_kwargs = has_var_keyword(sig)
        # Ellipsis also stands for all keyword arguments. Strip those off
        # the signature and do a partial bind with the rest.
        params = [p for n, p in sig.parameters.items()
                  if p.kind not in (Parameter.KEYWORD_ONLY,
                                    Parameter.VAR_KEYWORD)]
        partial = sig.replace(parameters=params)
        # Ellipsis should fill at least one argument. We strip it off if
        # it can stand for a `kwargs` argument.
        partial.bind_partial(*(args[:-1] if has_kwargs else args))
    else:
        sig.bind(*args, **kwargs)

    return sig


def has_var_keyword(sig):
    return any(p for n, p in sig.parameters.items()
               if p.kind is Parameter.VAR_KEYWORD)
