from __future__ import annotations

import csv
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from taskboard.models import Task

CSV_COLUMNS = ["ID", "Title", "Description", "Assigned To", "Priority", "Status", "Due Date", "Created Date"]


def tasks_to_df(tasks: Iterable[Task]) -> pd.DataFrame:
    rows = [
        [
            str(t.id),
            t.title,
            t.description,
            t.assigned_to,
            t.priority,
            t.status,
            t.due_date.isoformat(),
            t.created_date.isoformat(),
        ]
        for t in tasks
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)


def tasks_to_csv(tasks: Iterable[Task]) -> str:
    """Plain header row, then every cell double-quoted with quotes doubled."""
    df = tasks_to_df(tasks)
    body = ""
    if not df.empty:
        body = df.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return ",".join(CSV_COLUMNS) + "\n" + body


def export_filename(today: Optional[date] = None) -> str:
    return f"tasks_{(today or date.today()).isoformat()}.csv"
