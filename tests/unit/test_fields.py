"""
Unit tests for FieldAccumulator.
"""

from httputil.http.fields import FieldAccumulator, Scalar, Values


class TestFieldAccumulator:
    """Tests for FieldAccumulator class."""

    def test_set_stores_scalar(self):
        """Test storing a single value."""
        acc = FieldAccumulator()
        acc.set("a", "1")

        assert "a" in acc
        assert acc.is_list("a") is False
        assert acc.to_dict() == {"a": "1"}

    def test_append_promotes_scalar(self):
        """Test that appending to a scalar turns it into a list."""
        acc = FieldAccumulator()
        acc.set("a", "1")
        acc.append("a", "2")

        assert acc.is_list("a") is True
        assert acc.to_dict() == {"a": ["1", "2"]}

    def test_append_to_unseen_starts_list(self):
        """Test appending to a new key."""
        acc = FieldAccumulator()
        acc.append("a", "1")

        assert acc.to_dict() == {"a": ["1"]}

    def test_start_list(self):
        """Test starting a one-element list."""
        acc = FieldAccumulator()
        acc.start_list("a", "1")
        acc.append("a", "2")

        assert acc.to_dict() == {"a": ["1", "2"]}

    def test_set_overwrite_keeps_position(self):
        """Test that overwriting does not move the key."""
        acc = FieldAccumulator()
        acc.set("first", 1)
        acc.set("second", 2)
        acc.set("first", 3)

        assert list(acc.to_dict().items()) == [("first", 3), ("second", 2)]

    def test_unseen_key(self):
        """Test queries on a key never stored."""
        acc = FieldAccumulator()

        assert "missing" not in acc
        assert acc.is_list("missing") is False
        assert len(acc) == 0

    def test_to_dict_copies_lists(self):
        """Test that the flattened lists are independent copies."""
        acc = FieldAccumulator()
        acc.append("a", "1")

        flat = acc.to_dict()
        flat["a"].append("2")

        assert acc.to_dict() == {"a": ["1"]}

    def test_iteration_order(self):
        """Test iteration in first-seen order."""
        acc = FieldAccumulator()
        acc.set("b", 1)
        acc.append("a", 2)
        acc.append("b", 3)

        assert list(acc) == ["b", "a"]


class TestEntries:
    """Tests for the Scalar and Values entry types."""

    def test_values_default_empty(self):
        """Test that Values starts with its own empty list."""
        first = Values()
        second = Values()
        first.items.append("x")

        assert second.items == []

    def test_equality(self):
        """Test dataclass equality."""
        assert Scalar("a") == Scalar("a")
        assert Values(["a"]) != Values(["b"])
