from gridframe.table import render_table

EXPECTED = """+-----+-------+---------+
|     |  DAY  |  SALES  |
+-----+-------+---------+
| 0:  | 10000 |  9000   |
| 1:  |  99   | 199.99  |
| 2:  |   2   |  23.4   |
| 3:  |   3   |  56.2   |
| 4:  |   9   |  123.6  |
| 5:  |  10   |   NaN   |
+-----+-------+---------+
| 6X2 | INT64 | FLOAT64 |
+-----+-------+---------+"""


def _sample_rows():
    return [
        ["0:", "10000", "9000"],
        ["1:", "99", "199.99"],
        ["2:", "2", "23.4"],
        ["3:", "3", "56.2"],
        ["4:", "9", "123.6"],
        ["5:", "10", "NaN"],
    ]


def test_matches_dataframe_layout():
    out = render_table(["", "day", "sales"], _sample_rows(), ["6x2", "int64", "float64"])
    assert out.strip() == EXPECTED


def test_all_lines_same_width():
    out = render_table(["", "name"], [["0:", "a much longer value"]], ["1x1", "string"])
    lengths = {len(line) for line in out.splitlines()}
    assert len(lengths) == 1


def test_header_underscores_become_spaces():
    out = render_table(["first_name"], [["x"]], None)
    assert "FIRST NAME" in out.splitlines()[1]


def test_rows_are_not_upper_cased():
    out = render_table(["col"], [["abc"]], ["t"])
    assert "abc" in out
    assert "ABC" not in out


def test_short_rows_are_padded():
    out = render_table(["a", "b"], [["1"]], None)
    row_line = out.splitlines()[3]
    assert row_line.count("|") == 3


def test_no_rows_has_no_double_border():
    out = render_table(["", "day"], [], ["0x1", "int64"])
    lines = out.splitlines()
    assert all(a != b for a, b in zip(lines, lines[1:]) if a.startswith("+"))
    assert lines[-2].startswith("| 0X1")