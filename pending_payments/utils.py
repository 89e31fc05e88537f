from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path

LEADING_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def atomic_write_text(path: Path, content: str) -> None:
    # The parent directory must already exist.
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        # newline="" keeps CSV \r\n terminators intact.
        with tmp.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def parse_github_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_rfc3339(value: datetime | None) -> str:
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    return text.replace("+00:00", "Z")


def format_rfc1123(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.strftime("%a, %d %b %Y %H:%M:%S ") + (value.tzname() or "UTC")


def parse_bounty_amount(value: str | None) -> float:
    """Parse the leading number of ``value``; anything unparseable counts as 0.0."""
    if not value:
        return 0.0
    match = LEADING_FLOAT_RE.match(value.strip())
    if not match:
        return 0.0
    return float(match.group(0))
