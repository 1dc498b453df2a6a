from __future__ import annotations

import argparse
from typing import Sequence

from .config import Settings, load_dotenv_file
from .logger import setup_logging
from .service import build_service


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="moviedb-table",
        description="Create and seed, or delete, the movies table.",
    )
    parser.add_argument("command", choices=["create", "delete"])
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    load_dotenv_file()
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    service = build_service(settings)
    if args.command == "create":
        envelope = service.setup_table()
    else:
        envelope = service.delete_table()

    print(envelope.result.message)
    return 0 if envelope.result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
