from __future__ import annotations
import argparse
import datetime as dt
import logging
import os
import sys
from typing import List

import requests

from .api import ActivityClient
from .config import DEFAULT_CONFIG_PATH, TOKEN_ENV, load_config
from .errors import ConfigError, ProjectNotFoundError, RemoteFetchError
from .models import ReportLine
from .report import OUTPUT_FORMATS, build_report, render_lines
from .window import YearMonth, compute_window, get_tz, parse_target

log = logging.getLogger(__name__)


def run_report(
    client: ActivityClient,
    project_name: str,
    target: YearMonth,
    now: dt.datetime,
    match_year: bool = True,
    limit: int = 100,
    tz: str = "UTC",
) -> List[ReportLine]:
    project_id = client.resolve_project_id(project_name)
    log.info("Project %r resolved to %s", project_name, project_id)
    window = compute_window(target, now, tz)
    return build_report(client, project_id, target, window, match_year=match_year, limit=limit, tz=tz)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print the Todoist tasks completed in a project during one month")
    p.add_argument("--token", help=f"Todoist API token. If omitted, uses {TOKEN_ENV}")
    p.add_argument("--project", required=True, help="Exact project name (case-sensitive)")
    p.add_argument("--target", help="Target month as YYYY/MM; default current month in --tz")
    p.add_argument("--tz", help="Time zone for month boundaries and output (default UTC)")
    p.add_argument("--month-only", action="store_true",
                   help="Match the month number only, so the same month of other years is included")
    p.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format (default text)")
    p.add_argument("--limit", type=int, help="Events per activity request (default 100)")
    p.add_argument("--timeout", type=float, help="HTTP timeout seconds (default 30)")
    p.add_argument("--base-url", help="Defaults to https://api.todoist.com")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="YAML config file")
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    args = p.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    token = args.token or os.environ.get(TOKEN_ENV)
    if not token:
        log.error("Provide --token or set %s", TOKEN_ENV)
        return 2

    try:
        cfg = load_config(args.config)
        tz = args.tz or cfg["tz"]
        now = dt.datetime.now(get_tz(tz))
        target = parse_target(args.target) if args.target else YearMonth.current(tz, now)
        limit = args.limit if args.limit is not None else cfg["limit"]
        if limit <= 0:
            raise ConfigError("--limit must be positive")
        timeout = args.timeout if args.timeout is not None else cfg["timeout"]
        if timeout <= 0:
            raise ConfigError("--timeout must be positive")
    except ConfigError as e:
        log.error("%s", e)
        return 2

    match_year = cfg["match_year"] and not args.month_only

    with requests.Session() as session:
        client = ActivityClient(
            token,
            base_url=args.base_url or cfg["base_url"],
            timeout=timeout,
            session=session,
        )
        try:
            lines = run_report(client, args.project, target, now, match_year=match_year, limit=limit, tz=tz)
        except ProjectNotFoundError as e:
            log.error("%s", e)
            return 1
        except RemoteFetchError as e:
            log.error("%s", e)
            return 1

    for text in render_lines(lines, args.format or cfg["format"]):
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
