from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from tpn.errors import TpnError
from tpn.models.configs import RegenerationConfig, TpnRepo
from tpn.orchestration import TpnRegenerator, load_regeneration_config
from tpn.settings import get_settings

logger = logging.getLogger("regenerate_tpn")


def parse_args() -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(
        description="Import new sections from other repositories' third-party notices files."
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML/TOML/JSON file with tpn_file, potential_paths and repos.",
    )
    parser.add_argument("--tpn-file", type=Path, help="Local notices file to regenerate.")
    parser.add_argument(
        "--repo",
        action="append",
        default=[],
        metavar="ORG/NAME@BRANCH",
        help="Repository to gather notices from (repeatable).",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Candidate notices path tried in every repository (repeatable). "
        "Defaults to TPN_DEFAULT_PATHS.",
    )
    parser.add_argument("--base-url", help="Raw content base URL (default: TPN_RAW_BASE_URL).")
    parser.add_argument("--dry-run", action="store_true", help="Report only; do not rewrite the file.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: TPN_LOG_LEVEL).")
    return parser.parse_args()


def build_config(args: argparse.Namespace) -> RegenerationConfig:
    if args.config:
        config = load_regeneration_config(args.config)
    elif args.tpn_file:
        config = RegenerationConfig(tpn_file=args.tpn_file.resolve())
    else:
        raise SystemExit("Provide --config or --tpn-file")

    updates: dict[str, object] = {}
    if args.tpn_file and args.config:
        updates["tpn_file"] = args.tpn_file.resolve()
    if args.repo:
        updates["repos"] = [TpnRepo.from_spec(spec) for spec in args.repo]
    if args.path:
        updates["potential_paths"] = list(args.path)
    if args.base_url:
        updates["base_url"] = args.base_url
    if args.dry_run:
        updates["dry_run"] = True
    return config.model_copy(update=updates) if updates else config


def main() -> int:
    args = parse_args()
    settings = get_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)
    if not config.repos:
        raise SystemExit("No repositories configured; pass --repo or list repos in the config file")

    regenerator = TpnRegenerator(config, settings=settings)
    try:
        report = regenerator.run()
    except TpnError as exc:
        logger.error("%s", exc)
        return 1

    report.log()
    return 0


if __name__ == "__main__":
    sys.exit(main())
