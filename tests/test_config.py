"""
Tests for display configuration and its YAML loader.
"""

import pytest
from tensorplus.config import ConfigError, NumberFormat, load_number_format


class TestNumberFormat:
    """Test NumberFormat defaults and copying."""

    def test_defaults(self):
        fmt = NumberFormat()
        assert fmt.width == 8
        assert fmt.significant_digits == 6
        assert fmt.padding == " "

    def test_copy_is_independent(self):
        fmt = NumberFormat(width=4)
        copy = fmt.copy()
        copy.width = 9
        assert fmt.width == 4

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"significant_digits": -1},
        {"padding": ""},
        {"overflow_char": "##"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigError):
            NumberFormat(**kwargs)


class TestLoadNumberFormat:
    """Test loading formats from YAML."""

    def test_top_level_keys(self):
        fmt = load_number_format("width: 10\nsignificant_digits: 4\n")
        assert fmt == NumberFormat(width=10, significant_digits=4)

    def test_section(self):
        fmt = load_number_format("number_format:\n  overflow_char: '*'\n")
        assert fmt.overflow_char == "*"
        assert fmt.width == 8

    def test_empty_document(self):
        assert load_number_format("") == NumberFormat()

    def test_from_file(self, tmp_path):
        path = tmp_path / "display.yaml"
        path.write_text("width: 12\n", encoding="utf-8")
        assert load_number_format(str(path)).width == 12

    @pytest.mark.parametrize("text", [
        "colour: red",
        "- 1\n- 2",
        "width: [1",
        "number_format: 3",
        "width: wide",
    ])
    def test_invalid(self, text):
        with pytest.raises(ConfigError):
            load_number_format(text)
