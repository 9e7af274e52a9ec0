"""
Error Taxonomy
==============

Every failure the core can detect is a BitscopeError subclass. Each one
carries a `kind` (stable taxonomy name) and a `details` dict with enough
context (offending index, operand lengths, operation name) for a caller to
build its own message.

Each error also derives from the closest builtin so plain Python handlers
(`except ValueError`, `except IndexError`, ...) keep working.

Degenerate numeric inputs (empty strings, zero variance) are NOT errors:
metrics return sentinel values for those.
"""

from typing import Any, Dict, Iterable, Optional


class BitscopeError(Exception):
    """Base class for all bitscope failures."""

    kind = 'BitscopeError'

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details: Dict[str, Any] = details
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr() the message
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'message': self.message, **self.details}


class InvalidCharacterError(BitscopeError, ValueError):
    """Input contains a character outside {'0', '1'}."""

    kind = 'InvalidCharacterError'

    def __init__(self, index: int, char: str, argument: str = 'bits'):
        super().__init__(
            f"{argument}: invalid character {char!r} at index {index} "
            f"(only '0' and '1' are allowed)",
            index=index, char=char, argument=argument,
        )


class LengthMismatchError(BitscopeError, ValueError):
    """Operands of a binary operation differ in length."""

    kind = 'LengthMismatchError'

    def __init__(self, operation: str, left: int, right: int):
        super().__init__(
            f"{operation}: operand lengths differ ({left} != {right})",
            operation=operation, left_length=left, right_length=right,
        )


class IndexOutOfRangeError(BitscopeError, IndexError):
    """A start/end/position argument lies outside [lower, upper]."""

    kind = 'IndexOutOfRangeError'

    def __init__(self, argument: str, value: int, lower: int, upper: int):
        super().__init__(
            f"{argument}={value} is outside [{lower}, {upper}]",
            argument=argument, value=value, lower=lower, upper=upper,
        )


class DivisionByZeroError(BitscopeError, ZeroDivisionError):
    """Divide or modulo by the zero value."""

    kind = 'DivisionByZeroError'

    def __init__(self, operation: str):
        super().__init__(
            f"{operation}: divisor is zero",
            operation=operation,
        )


class UnknownOperationError(BitscopeError, KeyError):
    """Operation identifier is not in the catalog."""

    kind = 'UnknownOperationError'

    def __init__(self, name: str, available: Optional[Iterable[str]] = None):
        available = sorted(available or [])
        super().__init__(
            f"Unknown operation: '{name}'. Available: {', '.join(available)}",
            name=name, available=available,
        )


class UnknownMetricError(BitscopeError, KeyError):
    """Metric name is not in the catalog."""

    kind = 'UnknownMetricError'

    def __init__(self, name: str, available: Optional[Iterable[str]] = None):
        available = sorted(available or [])
        super().__init__(
            f"Unknown metric: '{name}' ({len(available)} metrics available)",
            name=name, available=available,
        )


class InvalidParameterError(BitscopeError, ValueError):
    """A parameter is well-typed but outside its documented domain."""

    kind = 'InvalidParameterError'

    def __init__(self, argument: str, value: Any, reason: str):
        super().__init__(
            f"{argument}={value!r}: {reason}",
            argument=argument, value=value, reason=reason,
        )


class AlignmentError(BitscopeError, ValueError):
    """Length is not a multiple of the width an operation requires."""

    kind = 'AlignmentError'

    def __init__(self, operation: str, length: int, multiple: int):
        super().__init__(
            f"{operation}: length {length} is not a multiple of {multiple}",
            operation=operation, length=length, multiple=multiple,
        )
