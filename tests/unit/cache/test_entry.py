"""Unit tests for Entry and size estimation."""

import json
import sys

from fast_cache.cache.entry import PRIMITIVE_SIZE, Entry, estimate_size


class TestEstimateSize:
    """Test the default size estimator."""

    def test_primitives_have_constant_cost(self):
        """Test scalars are charged a flat size."""
        for value in (None, True, 0, 10**30, 1.5):
            assert estimate_size(value) == PRIMITIVE_SIZE

    def test_strings_use_utf8_length(self):
        """Test strings are measured in UTF-8 bytes."""
        assert estimate_size("") == 0
        assert estimate_size("abc") == 3
        assert estimate_size("héllo") == 6

    def test_binary_uses_length(self):
        """Test binary values are measured by length."""
        assert estimate_size(b"abcd") == 4
        assert estimate_size(bytearray(10)) == 10

    def test_structures_use_serialized_length(self):
        """Test structures are measured by their JSON length."""
        value = {"nested": ["list", 1, None]}

        assert estimate_size(value) == len(json.dumps(value))

    def test_unserializable_objects_fall_back_to_repr(self):
        """Test objects JSON cannot encode are measured via repr."""
        class Thing:
            def __repr__(self):
                return "Thing()"

        assert estimate_size([Thing()]) == len(json.dumps(["Thing()"]))

    def test_circular_structures_do_not_fail(self):
        """Test self-referencing structures still get a size."""
        value = []
        value.append(value)

        assert estimate_size(value) == sys.getsizeof(value)


class TestEntry:
    """Test Entry identity semantics."""

    def test_entries_with_equal_values_are_distinct(self):
        """Test entries hash and compare by identity."""
        first = Entry(value="same", expires_at=10.0)
        second = Entry(value="same", expires_at=10.0)

        assert first != second
        assert len({first: "a", second: "b"}) == 2

    def test_is_expired_at_deadline(self):
        """Test an entry expires exactly at its deadline."""
        entry = Entry(value=1, expires_at=10.0)

        assert entry.is_expired(9.9) is False
        assert entry.is_expired(10.0) is True
        assert entry.size_estimate == 0
