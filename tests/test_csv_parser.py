"""
Unit tests for the CSV parser.
"""
import pytest

from directory_app.utils.csv_parser import parse_csv, split_line


@pytest.mark.unit
def test_parse_simple_rows():
    records = parse_csv("FLOOR,NAME\n2,Alice\n1,Bob\n")
    assert records == [{"FLOOR": "2", "NAME": "Alice"}, {"FLOOR": "1", "NAME": "Bob"}]


@pytest.mark.unit
def test_record_count_matches_data_lines():
    text = "a,b,c\n" + "\n".join(f"{i},x{i},y{i}" for i in range(25))
    records = parse_csv(text)
    assert len(records) == 25
    assert all(list(r.keys()) == ["a", "b", "c"] for r in records)


@pytest.mark.unit
def test_quoted_comma_is_not_split():
    records = parse_csv('x,y,z\na,"b,c",d\n')
    assert records == [{"x": "a", "y": "b,c", "z": "d"}]


@pytest.mark.unit
def test_doubled_quotes_are_unescaped():
    records = parse_csv('Quote\n"She said ""hi"""\n')
    assert records[0]["Quote"] == 'She said "hi"'


@pytest.mark.unit
def test_crlf_and_blank_lines_are_ignored():
    text = "\r\nA,B\r\n\r\n1,2\r\n   \r\n3,4\r\n\r\n"
    records = parse_csv(text)
    assert records == [{"A": "1", "B": "2"}, {"A": "3", "B": "4"}]


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   \n\n", "FLOOR,NAME\n", "FLOOR,NAME\n\n  \n"])
def test_header_only_or_empty_input_yields_nothing(text):
    assert parse_csv(text) == []


@pytest.mark.unit
def test_short_row_pads_with_empty_strings():
    records = parse_csv("A,B,C\n1\n")
    assert records == [{"A": "1", "B": "", "C": ""}]
    assert "undefined" not in records[0].values()


@pytest.mark.unit
def test_extra_values_are_dropped():
    records = parse_csv("A,B\n1,2,3,4\n")
    assert records == [{"A": "1", "B": "2"}]


@pytest.mark.unit
def test_header_tokens_are_trimmed_and_unquoted():
    records = parse_csv(' "Question" , Answer ,"Key, words"\nq,a,k\n')
    assert list(records[0].keys()) == ["Question", "Answer", "Key, words"]


@pytest.mark.unit
def test_values_are_trimmed():
    records = parse_csv("A,B\n  1 ,  two words  \n")
    assert records[0] == {"A": "1", "B": "two words"}


@pytest.mark.unit
def test_only_one_layer_of_quotes_is_removed():
    records = parse_csv('A\n""x""\n')
    # outer pair stripped, remaining doubled quotes collapse
    assert records[0]["A"] == '"x"'


@pytest.mark.unit
def test_duplicate_header_keeps_last_value():
    records = parse_csv("A,A,B\n1,2,3\n")
    assert records == [{"A": "2", "B": "3"}]


@pytest.mark.unit
def test_malformed_input_does_not_raise():
    records = parse_csv('A,B\n"unterminated,1\n,,,\n')
    assert len(records) == 2
    assert records[1] == {"A": "", "B": ""}


@pytest.mark.unit
def test_split_line_counts_preceding_quotes():
    assert split_line('a,"b,c",d') == ["a", '"b,c"', "d"]
    assert split_line('"x ""y"", z",w') == ['"x ""y"", z"', "w"]
    assert split_line("") == [""]


@pytest.mark.unit
def test_leading_byte_order_mark_is_ignored():
    records = parse_csv("\ufeffFLOOR,NAME\n2,Alice\n")
    assert records == [{"FLOOR": "2", "NAME": "Alice"}]
