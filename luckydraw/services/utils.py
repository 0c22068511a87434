import uuid
from typing import Any, Iterable, List


def new_participant_id() -> str:
    return uuid.uuid4().hex[:9]


def clean_names(values: Iterable[Any]) -> List[str]:
    """Stringify and trim every value, dropping blanks and missing cells."""
    names = []
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if s:
            names.append(s)
    return names


def names_from_text(text: str) -> List[str]:
    if not text:
        return []
    return clean_names(text.split("\n"))
