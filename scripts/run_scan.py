#!/usr/bin/env python
"""Run a BotCheck scan from the command line.

Usage:
    python scripts/run_scan.py example.com --mode allow
    python scripts/run_scan.py https://example.com/blog --mode block --json
"""

import argparse
import asyncio
import json
import sys

# Add project root to path
sys.path.insert(0, ".")

from api.exceptions import BotCheckError  # noqa: E402
from api.logging import setup_logging  # noqa: E402
from scanner.checks.models import ScanResult  # noqa: E402
from scanner.tasks.scan import run_scan  # noqa: E402

STATUS_MARKERS = {"pass": "PASS", "warn": "WARN", "fail": "FAIL"}


def print_report(result: ScanResult) -> None:
    """Print a readable scan report."""
    print(f"\n{'='*70}")
    print(f"BOTCHECK SCAN ({result.mode.value.upper()} mode)")
    print(f"{'='*70}")
    print(f"URL:        {result.url}")
    print(f"robots.txt: {result.robots_txt_url} ({'found' if result.robots_txt_found else 'not found'})")
    print(f"Score:      {result.score}/100")
    print(f"Summary:    {result.summary}")

    print(f"\n{'-'*70}")
    print("CHECKS")
    print(f"{'-'*70}")
    for check in result.checks:
        marker = STATUS_MARKERS[check.status.value]
        print(f"[{marker}] {check.name:<28} {check.score:>3}  (weight {check.weight})")
        print(f"       {check.summary}")
        for detail in check.details:
            print(f"         - {detail}")
        if check.recommendation:
            print(f"       -> {check.recommendation.text}")

    print(f"\n{'-'*70}")
    print("CRAWLERS")
    print(f"{'-'*70}")
    for verdict in result.bots:
        state = "allowed" if verdict.allowed else "blocked"
        print(f"  {verdict.name:<22} {state:<8} {verdict.crawler.operator}")

    if result.insights:
        print(f"\n{'-'*70}")
        print("INSIGHTS")
        print(f"{'-'*70}")
        for insight in result.insights:
            print(f"  [{insight.type.value}] {insight.text}")
    print()


async def main() -> int:
    parser = argparse.ArgumentParser(description="Scan a site for AI crawler accessibility")
    parser.add_argument("url", help="URL to scan; https:// is assumed if no scheme is given")
    parser.add_argument(
        "--mode",
        choices=["block", "allow"],
        default="allow",
        help="Whether the goal is to block or allow AI crawlers (default: allow)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw JSON result instead of a report",
    )

    args = parser.parse_args()

    setup_logging()

    try:
        result = await run_scan(args.url, args.mode)
    except BotCheckError as e:
        print(f"Error ({e.code}): {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_report(result)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
