"""
Start one agent job against a running API and wait for its outcome.

Examples:
  python -m scripts.run_agent landing-analyzer --field url=https://example.com
  python -m scripts.run_agent website-intelligence \
      --field company_name=Acme --field website_url=https://acme.test --field number_documents=3
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List

from app.core.config import settings
from app.services.poller import JobPoller, JobStartError


def _parse_fields(pairs: List[str]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"--field expects key=value, got {pair!r}")
        payload[key] = value
    return payload


def _print_status(job: Dict[str, Any]) -> None:
    print(f"  status={job.get('status')}")


async def _run(args: argparse.Namespace) -> int:
    payload = _parse_fields(args.field)
    async with JobPoller(args.base, interval_s=args.interval, max_attempts=args.attempts) as poller:
        try:
            outcome = await poller.run(args.category, payload, on_status=_print_status)
        except JobStartError as exc:
            print(f"Start failed: {exc}", file=sys.stderr)
            return 2
    print(json.dumps({"job_id": outcome.job_id, "status": outcome.status, "job": outcome.job}, indent=2))
    if outcome.status == "completed":
        if outcome.file_url:
            print("File:", outcome.file_url)
        return 0
    print("Error:", outcome.error, file=sys.stderr)
    return 1


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("category", help="agent slug, e.g. landing-analyzer")
    ap.add_argument("--field", action="append", default=[], help="request field as key=value")
    ap.add_argument("--base", default=settings.api_base_url)
    ap.add_argument("--interval", type=float, default=settings.poll_interval_s)
    ap.add_argument("--attempts", type=int, default=settings.poll_max_attempts)
    args = ap.parse_args()
    raise SystemExit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
