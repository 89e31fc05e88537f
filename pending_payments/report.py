from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Any

from .models import ProjectItem
from .utils import atomic_write_text, format_rfc1123, parse_bounty_amount

LOGGER = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5
TOTAL_SYMBOL = "BUIDL"


def build_summary(items: list[ProjectItem], recent_limit: int = RECENT_ACTIVITY_LIMIT) -> dict[str, Any]:
    total_bounty = sum(parse_bounty_amount(item.bounty_amount) for item in items)

    by_recipient: dict[str, float] = defaultdict(float)
    for item in items:
        if item.recipient:
            by_recipient[item.recipient] += parse_bounty_amount(item.bounty_amount)

    return {
        "total_items": len(items),
        "total_bounty": total_bounty,
        "by_recipient": dict(sorted(by_recipient.items())),
        "recent": items[:recent_limit],
    }


def _whole(value: float) -> str:
    return f"{value:.0f}"


def format_summary_report(
    summary: dict[str, Any],
    generated_at: datetime,
    symbol: str = TOTAL_SYMBOL,
) -> str:
    lines = []
    lines.append("# Project Summary Report")
    lines.append(f"Generated on: {format_rfc1123(generated_at)}")
    lines.append("")

    lines.append("## Overview")
    lines.append(f"Total Items: {summary['total_items']}")
    lines.append(f"Total Bounty Value: {_whole(summary['total_bounty'])} {symbol}")
    lines.append("")

    lines.append("## Items by Recipient")
    for recipient, amount in summary["by_recipient"].items():
        lines.append(f"- {recipient}: {_whole(amount)} {symbol}")
    lines.append("")

    lines.append("## Recent Activity")
    for item in summary["recent"]:
        updated = item.updated_at.strftime("%Y-%m-%d") if item.updated_at else ""
        lines.append(
            f"- {item.title} (Updated: {updated}) - Recipient: {item.recipient}, "
            f"Bounty: {item.bounty_amount} {item.bounty_symbol}"
        )

    return "\n".join(lines) + "\n"


def write_summary_report(
    items: list[ProjectItem],
    path: Path,
    generated_at: datetime | None = None,
    symbol: str = TOTAL_SYMBOL,
) -> Path:
    if generated_at is None:
        generated_at = datetime.now().astimezone()
    text = format_summary_report(build_summary(items), generated_at, symbol=symbol)
    atomic_write_text(path, text)
    LOGGER.info("Wrote summary for %s items to %s", len(items), path)
    return path
