"""Context binding shared by the decorators."""

import types
from typing import Any, Callable


def bind_context(operation: Callable, context: Any) -> Callable:
    """
    Bind operation to context the way a method is bound to its instance.

    The context becomes the first positional argument of every call.
    A context of None leaves the operation unbound.
    """
    if context is None:
        return operation
    return types.MethodType(operation, context)
