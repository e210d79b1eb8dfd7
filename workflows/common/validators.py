"""
Field validators shared by every intake flow.

Each validator is a small callable taking the raw (already trimmed) user text
and returning a ValidationResult. A rejected value never raises: the flow
engine turns the reason into a re-prompt and leaves the session untouched.

Usage:
    from workflows.common.validators import email, numeric_range

    result = numeric_range(1, 10)("3")
    result.value  # 3
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"\+?[\d\s\-\(\)]{7,}")


@dataclass
class ValidationResult:
    """Result of validating one field value."""

    is_valid: bool
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def accept(cls, value: Any) -> "ValidationResult":
        return cls(is_valid=True, value=value)

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason)


Validator = Callable[[str], ValidationResult]


@dataclass(frozen=True)
class NonEmpty:
    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip()
        if not value:
            return ValidationResult.reject("This field cannot be empty.")
        return ValidationResult.accept(value)


@dataclass(frozen=True)
class MinLength:
    length: int

    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip()
        if len(value) < self.length:
            return ValidationResult.reject(
                f"Please enter at least {self.length} characters."
            )
        return ValidationResult.accept(value)


@dataclass(frozen=True)
class FixedLength:
    """Exact-length identifiers such as national ID or tax numbers."""

    length: int
    digits_only: bool = False

    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip().replace(" ", "")
        if self.digits_only and not value.isdigit():
            return ValidationResult.reject("Please use digits only.")
        if len(value) != self.length:
            return ValidationResult.reject(
                f"This must be exactly {self.length} characters long."
            )
        return ValidationResult.accept(value)


@dataclass(frozen=True)
class Email:
    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip()
        if not EMAIL_PATTERN.fullmatch(value):
            return ValidationResult.reject(
                "Please enter a valid email address (e.g., name@company.com)."
            )
        return ValidationResult.accept(value.lower())


@dataclass(frozen=True)
class PhoneShape:
    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip()
        if not PHONE_PATTERN.fullmatch(value):
            return ValidationResult.reject(
                "Please enter a valid phone number (e.g., +263 77 123 4567)."
            )
        return ValidationResult.accept(value)


@dataclass(frozen=True)
class NumericRange:
    minimum: int
    maximum: int

    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip()
        try:
            number = int(value)
        except ValueError:
            return ValidationResult.reject(
                f"Please enter a number between {self.minimum} and {self.maximum}."
            )
        if number < self.minimum or number > self.maximum:
            logger.debug("[VALIDATE] %s outside %s..%s", number, self.minimum, self.maximum)
            return ValidationResult.reject(
                f"Please enter a number between {self.minimum} and {self.maximum}."
            )
        return ValidationResult.accept(number)


@dataclass(frozen=True)
class EnumChoice:
    """Accept one of a fixed set of answers.

    ``choices`` maps accepted input (compared case-insensitively) to the value
    stored in the payload. Stored values are accepted as input too.
    """

    choices: Tuple[Tuple[str, str], ...]
    _lookup: Dict[str, str] = field(default_factory=dict, init=False, compare=False, hash=False, repr=False)

    def __post_init__(self) -> None:
        lookup: Dict[str, str] = {}
        for key, stored in self.choices:
            lookup[key.strip().lower()] = stored
            lookup.setdefault(stored.strip().lower(), stored)
        object.__setattr__(self, "_lookup", lookup)

    @property
    def options(self) -> FrozenSet[str]:
        return frozenset(key for key, _ in self.choices)

    def __call__(self, raw: str) -> ValidationResult:
        stored = self._lookup.get(raw.strip().lower())
        if stored is None:
            listed = ", ".join(key for key, _ in self.choices)
            return ValidationResult.reject(f"Please reply with one of: {listed}.")
        return ValidationResult.accept(stored)


@dataclass(frozen=True)
class DigitsOnly:
    """Numeric identifiers such as bank account numbers."""

    minimum: int

    def __call__(self, raw: str) -> ValidationResult:
        value = re.sub(r"[\s\-]", "", raw)
        if not value.isdigit():
            return ValidationResult.reject("Please use digits only.")
        if len(value) < self.minimum:
            return ValidationResult.reject(f"Please enter at least {self.minimum} digits.")
        return ValidationResult.accept(value)


@dataclass(frozen=True)
class IsoDate:
    def __call__(self, raw: str) -> ValidationResult:
        value = raw.strip()
        try:
            parsed = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            return ValidationResult.reject("Please enter a valid date in the format YYYY-MM-DD.")
        if parsed > date.today():
            return ValidationResult.reject("The date cannot be in the future.")
        return ValidationResult.accept(parsed.isoformat())


@dataclass(frozen=True)
class Skippable:
    """Wrap a validator so the word 'skip' stores ``default`` instead."""

    inner: Validator
    default: str = "Not provided"

    def __call__(self, raw: str) -> ValidationResult:
        if raw.strip().lower() == "skip":
            return ValidationResult.accept(self.default)
        return self.inner(raw)


def non_empty() -> NonEmpty:
    return NonEmpty()


def min_length(length: int) -> MinLength:
    return MinLength(length)


def fixed_length(length: int, *, digits_only: bool = False) -> FixedLength:
    return FixedLength(length, digits_only)


def email() -> Email:
    return Email()


def phone_shape() -> PhoneShape:
    return PhoneShape()


def numeric_range(minimum: int, maximum: int) -> NumericRange:
    if minimum > maximum:
        raise ValueError(f"numeric_range minimum {minimum} exceeds maximum {maximum}")
    return NumericRange(minimum, maximum)


def enum_choice(choices: Dict[str, str]) -> EnumChoice:
    if not choices:
        raise ValueError("enum_choice needs at least one choice")
    return EnumChoice(tuple(choices.items()))


def numbered_choice(options: Tuple[str, ...]) -> EnumChoice:
    """Accept "1".."N" or the option text itself."""
    return enum_choice({str(number): option for number, option in enumerate(options, start=1)})


def yes_no() -> EnumChoice:
    return enum_choice({"yes": "yes", "y": "yes", "no": "no", "n": "no"})


def digits_only(minimum: int) -> DigitsOnly:
    return DigitsOnly(minimum)


def iso_date() -> IsoDate:
    return IsoDate()


def skippable(inner: Validator, default: str = "Not provided") -> Skippable:
    return Skippable(inner, default)


__all__ = [
    "ValidationResult",
    "Validator",
    "non_empty",
    "min_length",
    "fixed_length",
    "email",
    "phone_shape",
    "numeric_range",
    "enum_choice",
    "numbered_choice",
    "yes_no",
    "digits_only",
    "iso_date",
    "skippable",
]
