"""
Unit tests for the validation rules.
"""

import unittest
from datetime import date

from errors import ValidationFailed
from validation import (
    compute_duration,
    parse_date,
    require_fields,
    validate_dates,
    validate_email,
    validate_guest_count,
    validate_name,
    validate_phone,
    validate_price,
    validate_status,
)

TODAY = date(2025, 1, 1)


class EmailTestCase(unittest.TestCase):

    def test_accepts_local_at_domain_tld(self):
        for value in ("guest@example.com", "a.b+c@mail.example.org", "x@y.z"):
            with self.subTest(value=value):
                self.assertEqual(validate_email(value), value.lower())

    def test_normalizes_case_and_whitespace(self):
        self.assertEqual(validate_email("  John.Smith@Example.COM "), "john.smith@example.com")

    def test_rejects_malformed(self):
        for value in ("guest.example.com", "guest@example", "gu est@example.com",
                      "guest@exa mple.com", "@example.com", "guest@.", "", None, 42):
            with self.subTest(value=value):
                with self.assertRaises(ValidationFailed):
                    validate_email(value)

    def test_reports_field_name(self):
        with self.assertRaises(ValidationFailed) as ctx:
            validate_email("nope", "guestEmail")
        self.assertEqual(ctx.exception.field, "guestEmail")


class PhoneTestCase(unittest.TestCase):

    def test_absent_or_empty_passes(self):
        self.assertEqual(validate_phone(None), "")
        self.assertEqual(validate_phone(""), "")

    def test_accepts_formatted_numbers(self):
        self.assertEqual(validate_phone("+1 (555) 123-4567"), "+1 (555) 123-4567")
        self.assertEqual(validate_phone("5551234567"), "5551234567")

    def test_rejects_letters(self):
        with self.assertRaises(ValidationFailed):
            validate_phone("555-CALL-NOW")

    def test_rejects_short_numbers(self):
        with self.assertRaises(ValidationFailed) as ctx:
            validate_phone("555-1234")
        self.assertIn("at least 10", ctx.exception.reason)

    def test_length_is_checked_after_trimming(self):
        with self.assertRaises(ValidationFailed):
            validate_phone("   12345678  ")
        self.assertEqual(validate_phone("  5551234567 "), "5551234567")


class DatesTestCase(unittest.TestCase):

    def test_valid_pair(self):
        self.assertEqual(
            validate_dates("2025-01-01", "2025-01-04", today=TODAY),
            (date(2025, 1, 1), date(2025, 1, 4)),
        )

    def test_check_in_in_past(self):
        with self.assertRaises(ValidationFailed) as ctx:
            validate_dates("2024-12-31", "2025-01-04", today=TODAY)
        self.assertEqual(ctx.exception.reason, "Check-in date cannot be in the past")

    def test_check_out_not_after_check_in(self):
        for check_out in ("2025-01-05", "2025-01-04"):
            with self.subTest(check_out=check_out):
                with self.assertRaises(ValidationFailed) as ctx:
                    validate_dates("2025-01-05", check_out, today=TODAY)
                self.assertEqual(ctx.exception.reason, "Check-out date must be after check-in date")

    def test_time_component_is_ignored(self):
        check_in, check_out = validate_dates("2025-01-01T23:30:00Z", "2025-01-02T01:00:00.000Z", today=TODAY)
        self.assertEqual((check_in, check_out), (date(2025, 1, 1), date(2025, 1, 2)))

    def test_unparsable_date(self):
        with self.assertRaises(ValidationFailed) as ctx:
            parse_date("next tuesday", "checkInDate")
        self.assertEqual(ctx.exception.field, "checkInDate")

    def test_duration(self):
        self.assertEqual(compute_duration(date(2025, 1, 1), date(2025, 1, 4)), 3)


class NumbersTestCase(unittest.TestCase):

    def test_guest_count_bounds(self):
        self.assertEqual(validate_guest_count(1), 1)
        self.assertEqual(validate_guest_count(10), 10)
        self.assertEqual(validate_guest_count("4"), 4)
        for value in (0, 11, -1, "abc", 2.5, True, None, "²", "3²"):
            with self.subTest(value=value):
                with self.assertRaises(ValidationFailed):
                    validate_guest_count(value)

    def test_price(self):
        self.assertEqual(validate_price(0), 0.0)
        self.assertEqual(validate_price("199.99"), 199.99)
        for value in (-1, "free", "nan", None, [100], 10 ** 400):
            with self.subTest(value=value):
                with self.assertRaises(ValidationFailed):
                    validate_price(value)


class TextTestCase(unittest.TestCase):

    def test_status(self):
        self.assertIsNone(validate_status(None))
        self.assertIsNone(validate_status(""))
        self.assertEqual(validate_status("checked-in"), "checked-in")
        with self.assertRaises(ValidationFailed):
            validate_status("archived")

    def test_name_length(self):
        self.assertEqual(validate_name("  Al "), "Al")
        with self.assertRaises(ValidationFailed):
            validate_name("A")
        with self.assertRaises(ValidationFailed):
            validate_name("x" * 101)

    def test_required_fields_treat_whitespace_as_missing(self):
        with self.assertRaises(ValidationFailed) as ctx:
            require_fields({"name": "Bob", "email": "   "}, ("name", "email", "message"))
        self.assertEqual(ctx.exception.reason, "Missing required fields: email, message")
