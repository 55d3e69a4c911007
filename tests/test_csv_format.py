"""
Tests for the comma-separated tensor format.

Format:
    elements comma separated, rows on separate lines, matrix faces
    separated by lines of semicolons (one per dimension boundary crossed)
"""

import pytest
from tensorplus import TensorStore
from tensorplus.csv_format import CSVParseError, parse_csv_file, parse_csv_string, to_csv


class TestToCsv:
    """Test CSV output."""

    def test_vector(self):
        assert to_csv(TensorStore([3], [1, 2, 3])) == "1,2,3"

    def test_matrix(self):
        assert to_csv(TensorStore([2, 3], [1, 2, 3, 4, 5, 6])) == "1,2,3\n4,5,6"

    def test_rank_three_single_separator(self):
        t = TensorStore([2, 2, 2], range(1, 9))
        assert to_csv(t) == "1,3\n5,7\n;\n2,4\n6,8"

    def test_rank_four_separator_depth(self):
        t = TensorStore([1, 1, 2, 2], [1, 2, 3, 4])
        assert to_csv(t) == "1\n;\n3\n;;\n2\n;\n4"


class TestParseCsvString:
    """Test CSV parsing."""

    def test_single_row_is_vector(self):
        t = parse_csv_string("1,2,3")
        assert t.shape == (3,)
        assert t.elements == [1.0, 2.0, 3.0]

    def test_matrix(self):
        t = parse_csv_string("1,2,3\n4,5,6\n")
        assert t.shape == (2, 3)
        assert t.get([1, 2]) == 6.0

    def test_whitespace_and_blank_lines(self):
        t = parse_csv_string("\n 1, 2\n\n3 ,4\n")
        assert t.shape == (2, 2)

    def test_converter(self):
        t = parse_csv_string("1,2\n3,4", converter=int)
        assert t.elements == [1, 2, 3, 4]
        assert all(isinstance(v, int) for v in t.elements)

    def test_name(self):
        t = parse_csv_string("1,2", name="x")
        assert t.name == "x"
        assert t.show_name is True

    @pytest.mark.parametrize("shape", [(2, 3), (2, 2, 3), (1, 2, 2, 2), (2, 1, 3, 1, 2)])
    def test_round_trip(self, shape):
        count = 1
        for dim in shape:
            count *= dim
        t = TensorStore(shape, range(count))
        assert parse_csv_string(to_csv(t), converter=int) == t

    def test_rank_four_layout(self):
        t = parse_csv_string("1\n;\n3\n;;\n2\n;\n4", converter=int)
        assert t.shape == (1, 1, 2, 2)
        assert t.elements == [1, 2, 3, 4]

    @pytest.mark.parametrize("text", [
        "",
        "\n\n",
        "1,2\n3",
        "1,x",
        "1,2\n;",
        ";\n1,2",
        "1\n;\n;\n2",
        "1,2\n;\n3",
        "1,2\n;;\n3,4\n;\n5,6",
    ])
    def test_malformed(self, text):
        with pytest.raises(CSVParseError):
            parse_csv_string(text)

    def test_error_reports_line(self):
        with pytest.raises(CSVParseError, match="line 2"):
            parse_csv_string("1,2\n3")

    def test_shape_restores_trailing_unit_dimensions(self):
        t = TensorStore([2, 2, 1], [1, 2, 3, 4])
        text = to_csv(t)
        assert parse_csv_string(text, converter=int).shape == (2, 2)
        assert parse_csv_string(text, converter=int, shape=(2, 2, 1)) == t

    def test_shape_restores_single_row_matrix(self):
        t = parse_csv_string("1,2,3", converter=int, shape=[1, 3])
        assert t.shape == (1, 3)
        assert t.elements == [1, 2, 3]

    @pytest.mark.parametrize("shape", [(2, 3), (2, 2, 2), (6,)])
    def test_shape_mismatch(self, shape):
        with pytest.raises(CSVParseError, match="expected shape"):
            parse_csv_string("1,2\n3,4\n5,6", shape=shape)


class TestParseCsvFile:
    """Test reading CSV from disk."""

    def test_name_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "weights.csv"
        path.write_text("1,2\n3,4\n", encoding="utf-8")
        t = parse_csv_file(str(path))
        assert t.name == "weights"
        assert t.shape == (2, 2)

    def test_shape_hint(self, tmp_path):
        path = tmp_path / "column.csv"
        path.write_text("1\n2\n", encoding="utf-8")
        assert parse_csv_file(str(path), shape=(2, 1, 1)).shape == (2, 1, 1)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_csv_file(str(tmp_path / "missing.csv"))
