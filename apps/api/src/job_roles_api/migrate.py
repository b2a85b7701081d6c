from __future__ import annotations

import argparse
from pathlib import Path
import sys

from alembic import command
from alembic.config import Config

from job_roles_api.config import get_settings

# alembic.ini and the alembic/ scripts ship with the source checkout, not the wheel.
DEFAULT_ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def build_alembic_config(*, ini_path: Path, database_url: str) -> Config:
    config = Config(str(ini_path))
    config.set_main_option("script_location", str(ini_path.parent / "alembic"))
    # configparser interpolation treats "%" specially.
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="job-roles-migrate",
        description="Apply Alembic migrations to the job roles database",
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLAlchemy URL of the target database",
    )
    parser.add_argument(
        "--revision",
        default="head",
        help="Target revision",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_ALEMBIC_INI,
        help="Path to alembic.ini (defaults to apps/api/alembic.ini in the source checkout)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.config.is_file():
        parser.error(f"alembic config not found: {args.config}; pass --config from a source checkout")

    print("[job-roles-migrate] running database migrations", flush=True)
    try:
        config = build_alembic_config(ini_path=args.config, database_url=args.database_url)
        command.upgrade(config, args.revision)
    except Exception as exc:
        print(f"[job-roles-migrate] failed: {exc}", file=sys.stderr, flush=True)
        raise SystemExit(1) from exc

    print(f"[job-roles-migrate] completed revision={args.revision}", flush=True)


if __name__ == "__main__":
    main()
