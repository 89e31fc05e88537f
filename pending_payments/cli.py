from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import requests

from . import __version__
from .config import apply_cli_overrides, load_config, load_token
from .export import read_items_csv, write_items_csv
from .project_query import GraphQLError, fetch_pending_items, resolve_project_id
from .report import write_summary_report
from .utils import setup_logging

LOGGER = logging.getLogger(__name__)


def _github_kwargs(cfg: dict[str, Any]) -> dict[str, Any]:
    gh = cfg["github"]
    return {
        "graphql_url": str(gh["graphql_url"]),
        "token": load_token(cfg),
        "timeout_sec": int(gh["timeout_sec"]),
        "user_agent": str(gh["user_agent"]),
    }


def _load_with_overrides(args: argparse.Namespace) -> dict[str, Any]:
    cfg = load_config(args.config)
    return apply_cli_overrides(
        cfg,
        {
            "project": {
                "org": getattr(args, "org", None),
                "number": getattr(args, "project_number", None),
            },
            "output": {
                "csv_path": getattr(args, "csv_out", None),
                "summary_path": getattr(args, "summary_out", None),
            },
        },
    )


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pending-payments")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    run = sub.add_parser("run", help="Export 'Pending Payment' items and write the summary report")
    run.add_argument("--config", type=Path)
    run.add_argument("--org")
    run.add_argument("--project-number", type=int)
    run.add_argument("--csv-out", type=Path)
    run.add_argument("--summary-out", type=Path)

    resolve = sub.add_parser("resolve-project", help="Print the project node id")
    resolve.add_argument("--config", type=Path)
    resolve.add_argument("--org")
    resolve.add_argument("--project-number", type=int)

    summarize = sub.add_parser("summarize", help="Rebuild the summary report from an existing CSV export")
    summarize.add_argument("--config", type=Path)
    summarize.add_argument("--input", type=Path)
    summarize.add_argument("--summary-out", type=Path)

    return parser


def _command_run(args: argparse.Namespace) -> int:
    cfg = _load_with_overrides(args)
    github = _github_kwargs(cfg)
    project = cfg["project"]
    classify = cfg["classify"]
    csv_path = Path(cfg["output"]["csv_path"])
    summary_path = Path(cfg["output"]["summary_path"])

    items, project_id = fetch_pending_items(
        **github,
        org=str(project["org"]),
        number=int(project["number"]),
        items_first=int(project["items_page_size"]),
        fields_first=int(project["field_values_page_size"]),
        status_name=str(classify["status_name"]),
        bounty_symbol=str(classify["bounty_symbol"]),
    )
    print(f"Project ID: {project_id}")
    print(f"Found {len(items)} '{classify['status_name']}' items in the project")

    write_items_csv(items, csv_path)
    print(f"CSV file generated: {csv_path}")

    write_summary_report(items, summary_path, symbol=str(classify["bounty_symbol"]))
    print(f"Summary report generated: {summary_path}")
    return 0


def _command_resolve_project(args: argparse.Namespace) -> int:
    cfg = _load_with_overrides(args)
    project = cfg["project"]
    project_id = resolve_project_id(
        **_github_kwargs(cfg),
        org=str(project["org"]),
        number=int(project["number"]),
    )
    print(project_id)
    return 0


def _command_summarize(args: argparse.Namespace) -> int:
    cfg = _load_with_overrides(args)
    source = Path(args.input or cfg["output"]["csv_path"])
    if not source.exists():
        raise ValueError(f"CSV export not found: {source}")
    summary_path = Path(cfg["output"]["summary_path"])
    items = read_items_csv(source)
    write_summary_report(items, summary_path, symbol=str(cfg["classify"]["bounty_symbol"]))
    print(f"Summary report generated from {len(items)} rows: {summary_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(getattr(args, "config", None))
    except ValueError as exc:
        parser.error(str(exc))
        return 2
    setup_logging(cfg.get("runtime", {}).get("log_level", "INFO"))

    try:
        if args.cmd == "run":
            return _command_run(args)
        if args.cmd == "resolve-project":
            return _command_resolve_project(args)
        if args.cmd == "summarize":
            return _command_summarize(args)
    except (requests.RequestException, GraphQLError) as exc:
        LOGGER.error("GitHub query failed: %s", exc)
        return 1
    except ValueError as exc:
        parser.error(str(exc))
        return 2
    except OSError as exc:
        LOGGER.error("Could not write output: %s", exc)
        return 1

    parser.error(f"Unhandled command: {args.cmd}")
    return 2


def _single_command_main(cmd: str) -> int:
    return main([cmd, *sys.argv[1:]])


def main_run() -> int:
    return _single_command_main("run")


if __name__ == "__main__":
    raise SystemExit(main())
