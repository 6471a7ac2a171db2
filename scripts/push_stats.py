from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import httpx

from statsync.core.config import get_settings

DEFAULT_URL = "http://localhost:8000/api/sync-stats"


def load_players(path: Path) -> list:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("players")
    if not isinstance(data, list):
        raise SystemExit(f"[push_stats] {path} must hold a list or {{\"players\": [...]}}")
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Push a JSON file of player stats to the sync endpoint.")
    parser.add_argument("path", type=Path, help="JSON file with the players array")
    parser.add_argument("--url", default=DEFAULT_URL)
    parser.add_argument("--api-key", default=None, help="Defaults to API_KEY from settings")
    parser.add_argument("--timeout", type=float, default=30.0)
    args = parser.parse_args()

    players = load_players(args.path)
    api_key = args.api_key or get_settings().API_KEY
    response = httpx.post(
        args.url,
        json={"players": players},
        headers={"x-api-key": api_key},
        timeout=args.timeout,
    )
    print(f"[push_stats] status={response.status_code} sent={len(players)}")
    print(response.text)
    if response.status_code != 200:
        sys.exit(1)


if __name__ == "__main__":
    main()
