from luckydraw.services.participant_store import ParticipantStore


def names(store):
    return [p.name for p in store]


def test_add_from_lines_trims_and_skips_blanks():
    s = ParticipantStore()
    added = s.add_from_lines("  Ana \n\n Luis\r\n   \nSara")
    assert added == 3
    assert names(s) == ["Ana", "Luis", "Sara"]


def test_add_from_lines_empty_is_noop():
    s = ParticipantStore()
    assert s.add_from_lines("") == 0
    assert s.add_from_lines("  \n \n") == 0
    assert len(s) == 0


def test_ids_are_unique():
    s = ParticipantStore()
    s.add_from_lines("\n".join(["x"] * 50))
    ids = [p.id for p in s]
    assert len(set(ids)) == 50


def test_id_collisions_are_retried():
    ids = iter(["a", "a", "b", "b", "c"])
    s = ParticipantStore(id_factory=lambda: next(ids))
    s.add_from_lines("one\ntwo\nthree")
    assert [p.id for p in s] == ["a", "b", "c"]


def test_dedupe_on_import():
    s = ParticipantStore()
    s.add_from_lines("Alice\nBob\nAlice", dedupe=True)
    assert names(s) == ["Alice", "Bob"]


def test_dedupe_skips_existing_and_is_case_sensitive():
    s = ParticipantStore()
    s.add_from_lines("Alice\nBob")
    added = s.add_from_lines("Bob\nalice\nCarol\nCarol", dedupe=True)
    assert added == 2
    assert names(s) == ["Alice", "Bob", "alice", "Carol"]


def test_without_dedupe_duplicates_are_kept():
    s = ParticipantStore()
    s.add_from_lines("Alice\nAlice")
    s.add_from_lines("Alice")
    assert names(s) == ["Alice", "Alice", "Alice"]


def test_add_from_rows_flattens_cells():
    s = ParticipantStore()
    added = s.add_from_rows([["Ana", " Luis "], [], ["", 7, None], ["Sara"]])
    assert added == 4
    assert names(s) == ["Ana", "Luis", "7", "Sara"]


def test_deduplicate_keeps_first_occurrence_in_place():
    s = ParticipantStore()
    s.add_from_lines("B\nA\nB\nC\nA\nB")
    first_ids = [p.id for p in s][:2]
    removed = s.deduplicate()
    assert removed == 3
    assert names(s) == ["B", "A", "C"]
    assert [p.id for p in s][:2] == first_ids


def test_remove_is_idempotent():
    s = ParticipantStore()
    s.add_from_lines("Ana\nLuis")
    target = s.participants[0].id
    assert s.remove(target) is True
    after_first = s.participants
    assert s.remove(target) is False
    assert s.participants == after_first
    assert names(s) == ["Luis"]


def test_remove_unknown_id_is_noop():
    s = ParticipantStore()
    s.add_from_lines("Ana")
    assert s.remove("nope") is False
    assert len(s) == 1


def test_clear_empties_the_list():
    s = ParticipantStore()
    s.add_from_lines("Ana\nLuis")
    assert s.clear() == 2
    assert len(s) == 0
    assert s.participants == []


def test_lines_split_only_on_newline():
    s = ParticipantStore()
    s.add_from_lines("Ana\x0bMaria\r\nLuis Perez\x0cJr\nSara")
    assert names(s) == ["Ana\x0bMaria", "Luis Perez\x0cJr", "Sara"]
