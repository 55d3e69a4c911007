"""
Tests for grid-text rendering.
"""

from tensorplus import TensorStore
from tensorplus.config import NumberFormat
from tensorplus.display import format_element, format_tensor


class TestFormatElement:
    """Test single-cell formatting."""

    def test_integer_padded_to_width(self):
        assert format_element(1, NumberFormat()) == "1" + " " * 7

    def test_float_significant_digits(self):
        assert format_element(1 / 3, NumberFormat()).rstrip() == "0.333333"
        assert format_element(1 / 3, NumberFormat(significant_digits=2)).rstrip() == "0.33"

    def test_overflow(self):
        assert format_element(123456789, NumberFormat()) == "########"
        assert format_element("a long label", NumberFormat(width=4, overflow_char="*")) == "****"

    def test_non_numeric(self):
        assert format_element("abc", NumberFormat(width=5, padding=".")) == "abc.."

    def test_bool_uses_str(self):
        assert format_element(True, NumberFormat()).rstrip() == "True"


class TestFormatTensor:
    """Test full tensor rendering."""

    def test_matrix(self):
        t = TensorStore([2, 2], [1, 2, 3, 4])
        assert format_tensor(t) == "1       2\n3       4"

    def test_vector_with_name(self):
        t = TensorStore([3], [1, 2, 3], name="v")
        assert str(t) == "v =\n1       2       3"

    def test_hidden_name(self):
        t = TensorStore([1], [5], name="v", show_name=False)
        assert str(t) == "5"

    def test_rank_three_faces(self):
        t = TensorStore([2, 2, 2], range(1, 9), name="A")
        expected = "\n".join([
            "A =",
            "A[:, :, 0]",
            "1       3",
            "5       7",
            "",
            "A[:, :, 1]",
            "2       4",
            "6       8",
        ])
        assert str(t) == expected

    def test_unnamed_face_labels(self):
        t = TensorStore([1, 1, 2], [1, 2])
        assert str(t) == "[:, :, 0]\n1\n\n[:, :, 1]\n2"

    def test_uses_tensor_number_format(self):
        t = TensorStore([1, 2], [1.5, 2.25])
        t.number_format = NumberFormat(width=5)
        assert str(t) == "1.5  2.25"

    def test_strips_custom_padding(self):
        t = TensorStore([1, 2], ["ab", "c"])
        t.number_format = NumberFormat(width=4, padding=".")
        assert str(t) == "ab..c"

    def test_keeps_trailing_whitespace_of_element(self):
        t = TensorStore([1], ["a "])
        t.number_format = NumberFormat(width=4, padding=".")
        assert str(t) == "a "
