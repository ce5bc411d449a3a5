"""Exception types shared by every kernel.

Two failure modes are distinguished:

* ``DomainViolation`` – an input fails its stated precondition (negative debt,
  dice count outside 1–10, ragged table ...).
* ``DegenerateComputation`` – the inputs are in range but the formula is
  undefined for them (zero volatility, a payment that never amortises the
  balance).

Both derive from ``CalculationError`` so callers can catch everything a kernel
raises with one clause and turn it into an inline message.
"""


class CalculationError(Exception):
    """Base class for kernel failures."""


class DomainViolation(CalculationError, ValueError):
    """An input is outside the kernel's domain."""


class DegenerateComputation(CalculationError, ArithmeticError):
    """The computation is undefined for otherwise valid inputs."""


__all__ = ["CalculationError", "DomainViolation", "DegenerateComputation"]
