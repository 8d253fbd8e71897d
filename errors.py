# Di dalam file: errors.py
"""
Typed errors of the fara'id engine.

These never cross the public boundary of `calculator.calculate_inheritance`:
the entry point turns them into a failed CalculationResult.
"""

from typing import Any, Dict, Optional


class InheritanceError(Exception):
    code = "UNKNOWN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}


class InputValidationError(InheritanceError):
    """Estate or census rejected before any stage runs."""
    code = "VALIDATION_ERROR"


class CalculationError(InheritanceError):
    """Internal invariant broken inside a stage (zero divisor, bad weights)."""
    code = "CALCULATION_ERROR"


class UnknownMadhabError(InheritanceError):
    code = "FIQH_ERROR"

    def __init__(self, madhab: str):
        super().__init__(f"Unknown madhab '{madhab}'", context={"madhab": madhab})
        self.madhab = madhab


ERROR_MESSAGES: Dict[str, str] = {
    "VALIDATION_ERROR": "Input validation failed",
    "CALCULATION_ERROR": "Calculation failed",
    "FIQH_ERROR": "Fiqh rule lookup failed",
    "UNKNOWN_ERROR": "An unexpected error occurred",
}
