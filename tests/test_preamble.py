"""Tests for preamble detection."""
from csvsniffer.inference.preamble import consistent_count, count_preamble_rows, modal_count

DELIMITERS = [',', '\t', ';', '|']


class TestModalCount:

    def test_most_common_count(self):
        assert modal_count([3, 3, 4]) == (3, 2)

    def test_ties_prefer_more_fields(self):
        assert modal_count([2, 5]) == (5, 1)

    def test_empty(self):
        assert modal_count([]) == (0, 0)

    def test_consistency_needs_strict_majority_and_two_fields(self):
        assert consistent_count([4, 4, 4, 1]) == 4
        assert consistent_count([4, 4, 3, 3]) is None
        assert consistent_count([1, 1, 1]) is None


class TestCountPreambleRows:
    """Leading non-tabular lines are counted; tables without them give 0."""

    def test_two_title_lines(self):
        text = (
            "Quarterly Sales Report\n"
            "Prepared by the finance team\n"
            "region,q1,q2,q3\n"
            "north,1,2,3\n"
            "south,4,5,6\n"
            "east,7,8,9\n"
        )
        assert count_preamble_rows(text, DELIMITERS) == 2

    def test_no_preamble(self):
        assert count_preamble_rows("a,b,c\n1,2,3\n4,5,6\n", DELIMITERS) == 0

    def test_title_and_blank_line(self):
        text = "Report generated 2023-01-01\n\nid,name,active\n1,Alice,true\n2,Bob,false\n"
        assert count_preamble_rows(text, DELIMITERS) == 2

    def test_title_with_a_delimiter_in_it(self):
        text = "Report, 2023\nid,a,b,c\n1,2,3,4\n5,6,7,8\n"
        assert count_preamble_rows(text, DELIMITERS) == 1

    def test_comment_lines(self):
        text = "# exported from billing\n# do not edit\nid\tamount\n1\t10\n2\t20\n"
        assert count_preamble_rows(text, DELIMITERS) == 2

    def test_single_column_file_is_not_preamble(self):
        assert count_preamble_rows("name\nalice\nbob\ncarol\n", DELIMITERS) == 0

    def test_too_short_to_tell(self):
        assert count_preamble_rows("just a title\n", DELIMITERS) == 0
        assert count_preamble_rows("", DELIMITERS) == 0

    def test_max_rows_limits_the_scan(self):
        text = "title\n" * 5 + "a,b\n1,2\n3,4\n"
        assert count_preamble_rows(text, DELIMITERS, max_rows=3) == 0
        assert count_preamble_rows(text, DELIMITERS, max_rows=10) == 5

    def test_every_quote_option_is_tried(self):
        text = "Report\nid,label\n1,'a, b'\n2,'c, d'\n3,e\n"
        assert count_preamble_rows(text, DELIMITERS, quotes=['"']) == 0
        assert count_preamble_rows(text, DELIMITERS, quotes=['"', "'"]) == 1

    def test_unbalanced_quote_in_title(self):
        text = "'Quarterly sales\n\nid,name,qty\n1,a,2\n2,b,3\n3,c,4\n"
        assert count_preamble_rows(text, DELIMITERS, quotes=['"', "'"]) == 2
