"""Tests for override flag formatting."""

from dynarun.utils.flags import format_flag, format_flags, format_value


class TestFormatValue:
    """Tests for formatting flag values."""

    def test_scalars(self):
        """Test strings, numbers and booleans."""
        assert format_value("prod") == "prod"
        assert format_value(3) == "3"
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_list(self):
        """Test that lists are bracketed and comma separated."""
        assert format_value(["a", "b"]) == "[a,b]"

    def test_mapping_and_none_as_json(self):
        """Test that mappings and None are serialised as JSON."""
        assert format_value({"a": 1}) == '{"a":1}'
        assert format_value(None) == "null"


class TestFormatFlag:
    """Tests for formatting a single flag."""

    def test_named_flag(self):
        """Test the --flag=value form."""
        assert format_flag("parallel", 3) == "--parallel=3"
        assert format_flag("projects", ["a", "b"]) == "--projects=[a,b]"

    def test_positional_values(self):
        """Test that positional values are space separated without a flag."""
        assert format_flag("_", ["x", "y"]) == "x y"
        assert format_flag("_", "x") == "x"

    def test_format_flags_keeps_order(self):
        """Test that all overrides are formatted in insertion order."""
        overrides = {"verbose": True, "parallel": 3, "_": ["extra"]}
        assert format_flags(overrides) == ["--verbose=true", "--parallel=3", "extra"]

    def test_format_flags_empty(self):
        """Test that no overrides give no flags."""
        assert format_flags({}) == []
