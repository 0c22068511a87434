from __future__ import annotations

import csv
import io
import logging
from typing import Dict, List, Sequence, Union

import pandas as pd

from luckydraw.services.participant_store import Participant
from luckydraw.services.utils import clean_names

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Group", "Name"]


def _decode(data: Union[bytes, str], encoding: str) -> str:
    if isinstance(data, bytes):
        text = data.decode(encoding, errors="replace")
    else:
        text = data
    return text.lstrip("\ufeff")


def read_rows(data: Union[bytes, str], encoding: str = "utf-8", sep: str = ",") -> List[List[str]]:
    """Parse headerless delimited text. Rows the csv module rejects are skipped."""
    text = _decode(data, encoding)
    if not text.strip():
        return []
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=sep)
    rows: List[List[str]] = []
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            logger.warning(f"[Import] skipping malformed row near line {reader.line_num}: {e}")
            continue
        if row:
            rows.append(row)
    return rows


def names_from_rows(rows: Sequence[Sequence[object]]) -> List[str]:
    return clean_names(cell for row in rows if row for cell in row)


def group_rows(groups: Sequence[Sequence[Participant]]) -> List[Dict[str, str]]:
    return [
        {"Group": f"Group {idx}", "Name": p.name}
        for idx, group in enumerate(groups, start=1)
        for p in group
    ]


def groups_to_csv(groups: Sequence[Sequence[Participant]], sep: str = ",") -> str:
    df = pd.DataFrame(group_rows(groups), columns=EXPORT_COLUMNS)
    return df.to_csv(index=False, sep=sep, lineterminator="\n")
