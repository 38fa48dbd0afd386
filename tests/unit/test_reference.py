"""Unit tests for booking reference generation."""

import re

from lakeside.services import ReferenceGenerator
from lakeside.services.reference import REFERENCE_PREFIX

REFERENCE_PATTERN = re.compile(r"^LR\d{6}[0-9A-Z]{3}$")


class TestReferenceFormat:
    """Tests for the shape of generated references."""

    def test_reference_has_prefix_stamp_and_suffix(self):
        generator = ReferenceGenerator()

        reference = generator.generate()

        assert reference.startswith(REFERENCE_PREFIX)
        assert REFERENCE_PATTERN.match(reference)

    def test_stamp_is_last_six_digits_of_clock(self):
        generator = ReferenceGenerator(clock_ms=lambda: 1717200000123)

        reference = generator()

        assert reference[2:8] == "000123"

    def test_short_clock_values_are_zero_padded(self):
        generator = ReferenceGenerator(clock_ms=lambda: 42)

        assert generator()[2:8] == "000042"


class TestReferenceUniqueness:
    """Tests for uniqueness of generated references."""

    def test_ten_thousand_references_are_distinct(self):
        """10,000 references from one generator never repeat."""
        generator = ReferenceGenerator()

        references = [generator.generate() for _ in range(10_000)]

        assert len(set(references)) == 10_000

    def test_distinct_within_a_frozen_millisecond(self):
        """Suffixes are not reused while the clock stands still."""
        generator = ReferenceGenerator(clock_ms=lambda: 1717200000999)

        references = [generator() for _ in range(2_000)]

        assert len(set(references)) == 2_000
        assert all(r.startswith("LR000999") for r in references)
