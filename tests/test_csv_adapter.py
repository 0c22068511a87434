from luckydraw.services.csv_adapter import (
    group_rows, groups_to_csv, names_from_rows, read_rows,
)
from luckydraw.services.participant_store import Participant


def test_read_rows_without_header():
    rows = read_rows(b"Ana,Luis\nSara\n\n, Pedro ,\n")
    assert rows == [["Ana", "Luis"], ["Sara"], ["", " Pedro ", ""]]
    assert names_from_rows(rows) == ["Ana", "Luis", "Sara", "Pedro"]


def test_read_rows_handles_bom_quotes_and_other_separators():
    data = "\ufeffAna;\"Perez; Luis\"\n".encode("utf-8")
    assert names_from_rows(read_rows(data, sep=";")) == ["Ana", "Perez; Luis"]


def test_empty_or_blank_input_gives_no_rows():
    assert read_rows(b"") == []
    assert read_rows("  \n\n") == []


def test_undecodable_bytes_do_not_abort_import():
    names = names_from_rows(read_rows(b"Ana\n\xff\xfeBad\nLuis\n"))
    assert names[0] == "Ana"
    assert names[-1] == "Luis"


def test_export_format():
    groups = [
        [Participant("1", "Ana"), Participant("2", "Luis")],
        [Participant("3", "Sara, Jr")],
    ]
    assert group_rows(groups)[2] == {"Group": "Group 2", "Name": "Sara, Jr"}
    assert groups_to_csv(groups) == (
        "Group,Name\n"
        "Group 1,Ana\n"
        "Group 1,Luis\n"
        'Group 2,"Sara, Jr"\n'
    )


def test_export_without_groups_is_header_only():
    assert groups_to_csv([]) == "Group,Name\n"
