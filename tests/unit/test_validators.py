"""
Unit tests for the shared field validators.

Validators never raise on bad input; they return a ValidationResult with a
reason the flow engine turns into a re-prompt.
"""

import pytest

from workflows.common.validators import (
    digits_only,
    email,
    enum_choice,
    fixed_length,
    iso_date,
    min_length,
    non_empty,
    numbered_choice,
    numeric_range,
    phone_shape,
    skippable,
    yes_no,
)


class TestNonEmptyAndMinLength:
    def test_non_empty_rejects_whitespace(self):
        result = non_empty()("   ")
        assert result.is_valid is False
        assert "empty" in result.reason

    def test_non_empty_trims(self):
        assert non_empty()("  Acme  ").value == "Acme"

    def test_min_length_boundary(self):
        assert min_length(3)("abc").is_valid is True
        assert min_length(3)("ab").is_valid is False

    def test_min_length_counts_trimmed_text(self):
        assert min_length(3)("  ab  ").is_valid is False


class TestEmail:
    @pytest.mark.parametrize("value", ["foo@bar.com", "a.b@c.co.zw", "Owner@Example.COM"])
    def test_accepts_valid_shapes(self, value):
        assert email()(value).is_valid is True

    @pytest.mark.parametrize("value", ["foo", "foo@bar", "@bar.com", "foo bar@baz.com", ""])
    def test_rejects_invalid_shapes(self, value):
        result = email()(value)
        assert result.is_valid is False
        assert "email" in result.reason.lower()

    def test_normalizes_to_lowercase(self):
        assert email()("Owner@Example.COM").value == "owner@example.com"


class TestNumericRange:
    def test_returns_integer(self):
        result = numeric_range(1, 10)("2")
        assert result.is_valid is True
        assert result.value == 2

    @pytest.mark.parametrize("value", ["0", "11", "-1", "two", "2.5", ""])
    def test_rejects_out_of_range_or_non_numeric(self, value):
        result = numeric_range(1, 10)(value)
        assert result.is_valid is False
        assert "between 1 and 10" in result.reason

    def test_bounds_are_inclusive(self):
        assert numeric_range(1, 10)("1").is_valid is True
        assert numeric_range(1, 10)("10").is_valid is True

    def test_inverted_range_is_a_programming_error(self):
        with pytest.raises(ValueError):
            numeric_range(5, 1)


class TestEnumChoice:
    def test_maps_input_to_stored_value(self):
        validator = enum_choice({"1": "ready", "2": "not_ready"})
        assert validator("1").value == "ready"
        assert validator(" 2 ").value == "not_ready"

    def test_accepts_stored_value_case_insensitively(self):
        validator = enum_choice({"1": "ready"})
        assert validator("READY").value == "ready"

    def test_rejects_unknown_choice(self):
        result = enum_choice({"1": "ready", "2": "not_ready"})("3")
        assert result.is_valid is False
        assert "1, 2" in result.reason


class TestPhoneAndFixedLength:
    @pytest.mark.parametrize("value", ["+263 77 123 4567", "0771234567", "(077) 123-4567"])
    def test_phone_accepts_common_formats(self, value):
        assert phone_shape()(value).is_valid is True

    @pytest.mark.parametrize("value", ["12345", "call me", "+26377abc4567"])
    def test_phone_rejects_bad_formats(self, value):
        assert phone_shape()(value).is_valid is False

    def test_fixed_length_exact(self):
        validator = fixed_length(8, digits_only=True)
        assert validator("1234 5678").value == "12345678"
        assert validator("1234567").is_valid is False
        assert validator("1234567a").is_valid is False


class TestChoiceHelpers:
    def test_numbered_choice_accepts_number_or_text(self):
        validator = numbered_choice(("Current Account", "Savings Account"))
        assert validator("2").value == "Savings Account"
        assert validator("current account").value == "Current Account"
        assert validator("3").is_valid is False

    @pytest.mark.parametrize("raw,expected", [("yes", "yes"), ("Y", "yes"), ("no", "no"), ("n", "no")])
    def test_yes_no(self, raw, expected):
        assert yes_no()(raw).value == expected

    def test_yes_no_rejects_maybe(self):
        assert yes_no()("maybe").is_valid is False


class TestDigitsDatesAndSkip:
    def test_digits_only_strips_separators(self):
        assert digits_only(8)("1234-5678 90").value == "1234567890"

    def test_digits_only_minimum(self):
        result = digits_only(8)("1234567")
        assert result.is_valid is False
        assert "8 digits" in result.reason
        assert digits_only(8)("1234567a").reason == "Please use digits only."

    def test_iso_date(self):
        assert iso_date()("2015-06-30").value == "2015-06-30"
        assert iso_date()("30/06/2015").is_valid is False
        assert iso_date()("2015-02-30").is_valid is False

    def test_iso_date_rejects_future(self):
        result = iso_date()("2999-01-01")
        assert result.is_valid is False
        assert "future" in result.reason

    def test_skippable_stores_default(self):
        validator = skippable(min_length(3))
        assert validator("Skip").value == "Not provided"
        assert validator("BR-12").value == "BR-12"
        assert validator("ab").is_valid is False
