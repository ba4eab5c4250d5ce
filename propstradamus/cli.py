"""CLI entry points."""

from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence
import argparse
import asyncio
import json
import logging
import sys
import uuid

from propstradamus.config import Config
from propstradamus.exceptions import PropstradamusError
from propstradamus.ops import configure_logging, reset_metrics_recorder
from propstradamus.pipeline import fetch_and_select, make_rng
from propstradamus.presentation import (
    PresentationController,
    PresentationState,
    ViewKind,
    render_progress,
    render_view,
)
from propstradamus.reporting import write_picks_csv

logger = logging.getLogger(__name__)


def _try_load_dotenv(search_dir: Path) -> Optional[str]:
    env_path = search_dir / ".env"
    if env_path.exists():
        return str(env_path)
    return None


def _resolve_config(
    config_path: Optional[str],
    run_date: Optional[str],
    seed: Optional[int],
    base_url: Optional[str],
) -> Config:
    config = Config.load(config_path=config_path or _try_load_dotenv(Path.cwd()))
    overrides = {}
    if run_date:
        overrides["run_date"] = run_date
    if seed is not None:
        overrides["random_seed"] = seed
    if base_url:
        overrides["base_url"] = base_url
    return replace(config, **overrides) if overrides else config


def _print_metrics(recorder) -> None:
    print(json.dumps(recorder.snapshot(), indent=2, sort_keys=True), file=sys.stderr)


def _print_progress(state: PresentationState) -> None:
    if not state.analyzing:
        return
    sys.stdout.write("\r" + render_progress(state))
    sys.stdout.flush()


def run_presentation(
    config_path: Optional[str] = None,
    run_date: Optional[str] = None,
    seed: Optional[int] = None,
    base_url: Optional[str] = None,
    output_path: Optional[str] = None,
    show_metrics: bool = False,
    quiet: bool = False,
) -> int:
    """Run the animated loading sequence, then print the result card."""
    config = _resolve_config(config_path, run_date, seed, base_url)
    configure_logging(run_id=uuid.uuid4().hex)
    recorder = reset_metrics_recorder()

    controller = PresentationController(
        config,
        rng=make_rng(config.random_seed),
        on_update=None if quiet else _print_progress,
    )
    try:
        state = asyncio.run(controller.run())
    except KeyboardInterrupt:
        controller.cancel()
        print()
        logger.warning("Interrupted; prediction cycle abandoned")
        return 130

    if not quiet:
        print()
    view = controller.view()
    print(render_view(view, state))

    if output_path and state.result is not None:
        logger.info("Picks written to %s", write_picks_csv(state.result, output_path))
    if show_metrics:
        _print_metrics(recorder)
    return 1 if view is ViewKind.ERROR else 0


def run_pick(
    config_path: Optional[str] = None,
    run_date: Optional[str] = None,
    seed: Optional[int] = None,
    base_url: Optional[str] = None,
    output_path: Optional[str] = None,
    show_metrics: bool = False,
) -> int:
    """Run the selection without the loading sequence and print JSON."""
    config = _resolve_config(config_path, run_date, seed, base_url)
    configure_logging(run_id=uuid.uuid4().hex)
    recorder = reset_metrics_recorder()

    try:
        result = fetch_and_select(config)
    except PropstradamusError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    if output_path:
        logger.info("Picks written to %s", write_picks_csv(result, output_path))
    if show_metrics:
        _print_metrics(recorder)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", dest="config_path", help="Path to config file (.env or JSON)")
    parser.add_argument("--date", dest="run_date", help="Prediction date (YYYY-MM-DD)")
    parser.add_argument("--seed", dest="seed", type=int, help="Random seed for the headline draw")
    parser.add_argument("--base-url", dest="base_url", help="URL or directory holding predictions/")
    parser.add_argument("--output", dest="output_path", help="Write the picks to this CSV")
    parser.add_argument("--metrics", dest="show_metrics", action="store_true", help="Print cycle metrics")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Propstradamus daily prop pick")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Show the loading sequence and today's pick")
    _add_common_arguments(run)
    run.add_argument("--quiet", action="store_true", help="Skip the progress bar output")

    pick = subparsers.add_parser("pick", help="Print today's pick as JSON")
    _add_common_arguments(pick)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return run_presentation(
            config_path=args.config_path,
            run_date=args.run_date,
            seed=args.seed,
            base_url=args.base_url,
            output_path=args.output_path,
            show_metrics=args.show_metrics,
            quiet=getattr(args, "quiet", False),
        )
    if args.command == "pick":
        return run_pick(
            config_path=args.config_path,
            run_date=args.run_date,
            seed=args.seed,
            base_url=args.base_url,
            output_path=args.output_path,
            show_metrics=args.show_metrics,
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
