"""Tests for shared utility functions."""

import pytest

from agenda.config import settings
from agenda.utils import count_digits, normalize_phone


class TestNormalizePhone:
    @pytest.mark.parametrize("raw", [
        "(11) 98765-4321",
        "11 98765 4321",
        "11 9 8765-4321",
        "11.98765.4321",
        "  11987654321 ",
    ])
    def test_mobile_with_area_code(self, raw):
        assert normalize_phone(raw) == "11987654321"

    def test_landline_keeps_eight_digit_subscriber(self):
        assert normalize_phone("(21) 3456-7890") == "2134567890"

    def test_country_code_keeps_plus(self):
        assert normalize_phone("+55 (11) 98765-4321") == "+5511987654321"

    def test_country_code_without_plus_is_kept_as_digits(self):
        assert normalize_phone("55 11 98765-4321") == "5511987654321"

    def test_plus_only_honoured_at_the_start(self):
        assert normalize_phone("11 +98765-4321") == "11987654321"

    def test_same_customer_typed_two_ways_matches(self):
        assert normalize_phone("(11) 91234-5678") == normalize_phone("11912345678")


class TestCountDigits:
    def test_ignores_formatting(self):
        assert count_digits("+55 (11) 98765-4321") == 13

    def test_empty(self):
        assert count_digits("") == 0

    def test_subscriber_number_alone_meets_minimum(self):
        assert count_digits("9876-5432") >= settings.scheduling.min_phone_digits

    def test_truncated_number_falls_short(self):
        assert count_digits("98-765") < settings.scheduling.min_phone_digits
