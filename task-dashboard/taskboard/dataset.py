"""Static dataset loading.

The dataset is a JSON document::

    {"tasks": [...], "teamMembers": [...],
     "statistics": {"weeklyCompletions": [2, 1, 0, 3, 1, 2, 1]}}

``source`` is a filesystem path or an http(s) URL. Any failure to obtain or
parse the document raises LoadFailure; individual malformed records are
skipped with a warning instead.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import requests

from taskboard.errors import LoadFailure
from taskboard.models import Task, TeamMember

logger = logging.getLogger(__name__)


@dataclass
class Dataset:
    tasks: List[Task] = field(default_factory=list)
    team_members: List[TeamMember] = field(default_factory=list)
    weekly_completions: Optional[List[int]] = None


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _fetch_text(source: str, timeout: float) -> str:
    if _is_url(source):
        try:
            resp = requests.get(source, timeout=timeout, headers={"Accept": "application/json"})
            resp.raise_for_status()
        except requests.RequestException as e:
            raise LoadFailure(f"Failed to fetch dataset from {source}: {e}") from e
        return resp.text
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise LoadFailure(f"Failed to read dataset {source}: {e}") from e


def parse_dataset(document: Any) -> Dataset:
    if not isinstance(document, Mapping):
        raise LoadFailure("Dataset must be a JSON object")

    tasks: List[Task] = []
    for raw in document.get("tasks") or []:
        try:
            tasks.append(Task.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            rid = raw.get("id") if isinstance(raw, Mapping) else None
            logger.warning("Skipping malformed task id=%r: %s", rid, e)

    members: List[TeamMember] = []
    for raw in document.get("teamMembers") or []:
        try:
            members.append(TeamMember.from_dict(raw))
        except (TypeError, ValueError) as e:
            logger.warning("Skipping malformed team member: %s", e)

    weekly = None
    stats = document.get("statistics")
    if isinstance(stats, Mapping) and isinstance(stats.get("weeklyCompletions"), list):
        try:
            weekly = [int(v) for v in stats["weeklyCompletions"]]
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric weeklyCompletions")

    return Dataset(tasks=tasks, team_members=members, weekly_completions=weekly)


def load_dataset(source: Union[str, Path], timeout: float = 10) -> Dataset:
    text = _fetch_text(str(source), timeout)
    try:
        document = json.loads(text)
    except ValueError as e:
        raise LoadFailure(f"Dataset {source} is not valid JSON: {e}") from e
    dataset = parse_dataset(document)
    logger.info(
        "Loaded dataset %s tasks=%s team_members=%s",
        source, len(dataset.tasks), len(dataset.team_members),
    )
    return dataset
