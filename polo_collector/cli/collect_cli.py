from __future__ import annotations

"""POLO collector CLI (module invocation).

Usage:
    python -m polo_collector.cli.collect_cli --only all
    python -m polo_collector.cli.collect_cli --dry-run --root /path/to/project

Exit codes: 0 ok, 1 missing API key, 2 bad config.
"""

import argparse

from polo_collector.config import ConfigError, load_settings
from polo_collector.logging_utils import get_logger
from polo_collector.pipeline import STAGES, run
from polo_collector.serp_client import MissingApiKeyError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Collect SERP results and Google Trends series")
    parser.add_argument("--root", default=None, help="project root (default: $POLO_PROJECT_ROOT or cwd)")
    parser.add_argument("--config", default=None, help="collection config (default: <root>/config/queries.yml)")
    parser.add_argument("--only", choices=STAGES, default="all", help="which stage(s) to run")
    parser.add_argument("--profile", default="dev", help="runtime profile: dev | prod")
    parser.add_argument("--dry-run", action="store_true", help="resolve config and create folders only")
    parser.add_argument("--no-progress", action="store_true", help="hide progress bars")
    return parser


def main(argv=None) -> int:
    """Parse args, load settings, bootstrap logging, and run the pipeline."""
    args = build_parser().parse_args(argv)

    settings = load_settings(profile=args.profile, root=args.root)
    log = get_logger("polo_collector", log_dir=settings.paths.log_dir, level=settings.log_level)

    log.info(f"🌐 POLO collector – stage={args.only} root={settings.paths.root}")

    try:
        result = run(
            settings,
            only=args.only,
            config_path=args.config,
            dry_run=args.dry_run,
            progress=not args.no_progress,
        )
    except ConfigError as e:
        log.error(f"❌ Config error: {e}")
        return 2
    except MissingApiKeyError as e:
        log.error(f"❌ {e}")
        return 1

    for key, path in result.files.items():
        log.info(f"  {key}: {result.counts.get(key, 0)} rows -> {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
