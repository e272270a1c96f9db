"""
Minimal CI smoke test against a running API instance.

Checks:
- GET /health returns 200 and JSON
- POST /api/landing-analyzer/start without a URL is rejected with 400
- GET /api/landing-analyzer/status for an unknown job returns 404
- OPTIONS preflight on the start endpoint succeeds

Usage:
  python -m scripts.ci_smoke --base http://localhost:3001
"""

from __future__ import annotations

import argparse
import os

import httpx


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--base", default=os.environ.get("API_BASE_URL", "http://localhost:3001"))
    args = ap.parse_args()

    base = args.base.rstrip("/")

    with httpx.Client(timeout=10.0) as client:
        # Health
        r = client.get(f"{base}/health")
        r.raise_for_status()
        assert r.headers.get("content-type", "").startswith("application/json")
        assert r.json()["status"] in {"ok", "degraded"}

        # Validation
        r = client.post(f"{base}/api/landing-analyzer/start", json={})
        assert r.status_code == 400, r.text
        assert r.json()["error"] == "URL is required"

        # Unknown job
        r = client.get(f"{base}/api/landing-analyzer/status", params={"jobId": "job_0_smoke"})
        assert r.status_code == 404, r.text

        # Preflight
        r = client.options(f"{base}/api/landing-analyzer/start")
        assert r.status_code == 200, r.text

    print("SMOKE_OK", base)


if __name__ == "__main__":
    main()
