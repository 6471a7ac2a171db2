from __future__ import annotations

import argparse

from statsync.core.config import get_settings
from statsync.db.session import engine, init_db


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the player_stats table if it is missing.")
    parser.add_argument("--echo", action="store_true", help="Log the emitted DDL")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    engine.echo = args.echo
    init_db(engine)
    print(f"[init_db] env={settings.APP_ENV} url={engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
