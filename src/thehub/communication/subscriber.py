from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

# Contexts of these types compare by value; anything else by reference.
_VALUE_TYPES = (str, bytes, int, float, bool, tuple, frozenset)


def _is_value(context: Any) -> bool:
    return isinstance(context, _VALUE_TYPES)


class Subscriber(BaseModel):
    """A (callback, context) pair registered against a property.

    Two subscribers are equal when their callbacks compare equal and their
    contexts are the same object, or equal immutable values such as strings
    and numbers.  Equality never depends on which `Subscriber` instance was
    built.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    callback: Callable[..., Any]
    context: Any = None

    def call(self, value: Any):
        if self.context is None:
            return self.callback(value)
        return self.callback(self.context, value)

    def _same_context(self, other: "Subscriber") -> bool:
        if self.context is other.context:
            return True
        return (
            type(self.context) is type(other.context)
            and _is_value(self.context)
            and self.context == other.context
        )

    def equals(self, other: Any) -> bool:
        if not isinstance(other, Subscriber):
            return False
        return self.callback == other.callback and self._same_context(other)

    def not_equals(self, other: Any) -> bool:
        return not self.equals(other)

    def __eq__(self, other: Any) -> bool:
        return self.equals(other)

    def __ne__(self, other: Any) -> bool:
        return self.not_equals(other)

    def __hash__(self) -> int:
        if _is_value(self.context):
            try:
                return hash((self.callback, type(self.context), self.context))
            except TypeError:
                pass  # tuple holding unhashable items; equal values still share a type
            return hash((self.callback, type(self.context)))
        return hash((self.callback, id(self.context)))
