"""Unit tests for app.core.durations.parse_duration and JWT_EXPIRATION validation."""

import unittest
from datetime import timedelta

from pydantic import ValidationError

from app.core.config import Settings
from app.core.durations import parse_duration


class TestParseDuration(unittest.TestCase):
    """Short and long unit forms, bare seconds, and rejection of garbage."""

    def test_short_units(self) -> None:
        self.assertEqual(parse_duration("90s"), timedelta(seconds=90))
        self.assertEqual(parse_duration("15m"), timedelta(minutes=15))
        self.assertEqual(parse_duration("1h"), timedelta(hours=1))
        self.assertEqual(parse_duration("7d"), timedelta(days=7))
        self.assertEqual(parse_duration("2w"), timedelta(weeks=2))

    def test_long_units_and_spaces(self) -> None:
        self.assertEqual(parse_duration("2 days"), timedelta(days=2))
        self.assertEqual(parse_duration(" 3 Hours "), timedelta(hours=3))

    def test_fractional_amount(self) -> None:
        self.assertEqual(parse_duration("1.5h"), timedelta(minutes=90))

    def test_bare_number_is_seconds(self) -> None:
        self.assertEqual(parse_duration("3600"), timedelta(hours=1))

    def test_out_of_range_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_duration("99999999999999y")

    def test_invalid_values(self) -> None:
        for value in ("", "h", "1 fortnight", "one hour", "1h30m"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_duration(value)


class TestJwtExpirationSetting(unittest.TestCase):
    """Settings rejects unparseable or non-positive token lifetimes at load time."""

    def test_invalid_expiration_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="sqlite://", JWT_EXPIRATION="soon")

    def test_huge_expiration_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="sqlite://", JWT_EXPIRATION="99999999999999y")

    def test_zero_expiration_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="sqlite://", JWT_EXPIRATION="0s")

    def test_unsupported_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="oracle://db")


if __name__ == "__main__":
    unittest.main()
