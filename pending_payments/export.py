from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from .models import ProjectItem
from .utils import atomic_write_text, format_rfc3339, parse_github_datetime

LOGGER = logging.getLogger(__name__)

CSV_HEADER = [
    "ID",
    "Title",
    "URL",
    "Created At",
    "Updated At",
    "Due Date",
    "Description",
    "Recipient",
    "Bounty Amount",
    "Bounty Symbol",
]


def item_to_row(item: ProjectItem) -> list[str]:
    return [
        item.id,
        item.title,
        item.url,
        format_rfc3339(item.created_at),
        format_rfc3339(item.updated_at),
        item.due_date,
        item.description,
        item.recipient,
        item.bounty_amount,
        item.bounty_symbol,
    ]


def render_items_csv(items: list[ProjectItem]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow(item_to_row(item))
    return buffer.getvalue()


def write_items_csv(items: list[ProjectItem], path: Path) -> Path:
    atomic_write_text(path, render_items_csv(items))
    LOGGER.info("Wrote %s rows to %s", len(items), path)
    return path


def read_items_csv(path: Path) -> list[ProjectItem]:
    items: list[ProjectItem] = []
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        missing = [name for name in CSV_HEADER if name not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{path} is missing columns: {', '.join(missing)}")
        for row in reader:
            items.append(
                ProjectItem(
                    id=row["ID"],
                    title=row["Title"],
                    url=row["URL"],
                    created_at=parse_github_datetime(row["Created At"]),
                    updated_at=parse_github_datetime(row["Updated At"]),
                    due_date=row["Due Date"],
                    description=row["Description"],
                    recipient=row["Recipient"],
                    bounty_amount=row["Bounty Amount"],
                    bounty_symbol=row["Bounty Symbol"],
                )
            )
    return items
