"""
Error taxonomy for the kbnsum library.

Every precondition violation has its own class so callers can tell a missing
array from a short one, a length mismatch from a degenerate denominator.
Each class also derives from the closest builtin exception.
"""


class KBNSumError(Exception):
    """Base class for all kbnsum precondition failures."""


class MissingInputError(KBNSumError, TypeError):
    """A required array was not supplied."""

    def __init__(self, name: str = "x"):
        super().__init__(f"Required input '{name}' is None")
        self.name = name


class SizeTooSmallError(KBNSumError, ValueError):
    """The input is shorter than the operation allows."""

    def __init__(self, operation: str, required: int, actual: int):
        super().__init__(
            f"{operation} requires at least {required} value(s), got {actual}"
        )
        self.operation = operation
        self.required = required
        self.actual = actual


class LengthMismatchError(KBNSumError, ValueError):
    """Two arrays that must pair up elementwise differ in length."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Array lengths differ: {left} != {right}")
        self.left = left
        self.right = right


class DivisionByZeroError(KBNSumError, ZeroDivisionError):
    """A weight sum or bias-correction denominator is exactly zero."""

    def __init__(self, message: str = "Division by zero is imminent"):
        super().__init__(message)


class InvalidWeightsError(KBNSumError, TypeError):
    """Weights have a type the estimator cannot interpret."""
