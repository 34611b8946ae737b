"""CLI entrypoint for scanstage."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from scanstage import __version__
from scanstage.config import ProgressConfig, load_config
from scanstage.constants.branding import CLI_DESCRIPTION
from scanstage.exceptions import ConfigError, ScanStageError
from scanstage.exceptions.validation import format_errors
from scanstage.model import ProgressSnapshot
from scanstage.reporting import StdoutRenderer, TimelineRecorder, write_timeline
from scanstage.runner import RunOutcome, run_progress, simulate_progress
from scanstage.validation import preflight_validate


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="scanstage",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Drive the analysis-progress indicator for a simulated audit job")
    run.add_argument("-r", "--root", type=Path, required=True, help="Workspace root path")
    run.add_argument("-c", "--config", type=Path, help="Explicit config file")
    run.add_argument(
        "--ready-after-ms",
        type=int,
        default=0,
        help="Delay before the simulated audit job reports ready (default: 0)",
    )
    run.add_argument(
        "--timeout-s",
        type=float,
        default=None,
        help="Tear the run down if it has not completed after this many seconds",
    )
    run.add_argument(
        "-s",
        "--simulate",
        action="store_true",
        help="Run on a simulated clock and finish instantly",
    )
    run.add_argument(
        "-t",
        "--timeline-out",
        type=Path,
        default=None,
        help="Write every progress frame as JSON to this file (or directory)",
    )
    run.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    run.add_argument("--no-color", action="store_true", help="Disable colored output")
    run.add_argument("-v", "--verbose", action="store_true", help="Render full frames and debug logs")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without running")
    validate.add_argument("-r", "--root", type=Path, required=True, help="Workspace root path")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    stages = subparsers.add_parser("stages", help="List the configured stage catalog")
    stages.add_argument("-r", "--root", type=Path, required=True, help="Workspace root path")
    stages.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return _handle_validate_config(args)
    if args.command == "stages":
        return _handle_stages(args)
    if args.command != "run":
        parser.error(f"Unsupported command: {args.command}")
    return _handle_run(args)


def _load_validated_config(args: argparse.Namespace) -> ProgressConfig | None:
    """Run preflight validation and load config; print errors and return None on failure."""
    validation_errors = preflight_validate(root=args.root, config_path=args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return None
    try:
        return load_config(args.root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return None


def _handle_run(args: argparse.Namespace) -> int:
    config = _load_validated_config(args)
    if config is None:
        return 2

    use_color = not args.no_color and sys.stdout.isatty()
    renderer = StdoutRenderer(config.stages, color=use_color, verbose=args.verbose)
    recorder = TimelineRecorder()

    def _print_frame(snapshot: ProgressSnapshot) -> None:
        if args.no_stdout:
            return
        print(renderer.render(snapshot) if args.verbose else renderer.render_status_line(snapshot))

    timeout_ms = args.timeout_s * 1000.0 if args.timeout_s is not None else None
    listeners = (recorder, _print_frame)
    try:
        outcome: RunOutcome
        if args.simulate:
            outcome = simulate_progress(
                config,
                ready_after_ms=args.ready_after_ms,
                timeout_ms=timeout_ms,
                listeners=listeners,
            )
        else:
            outcome = asyncio.run(
                run_progress(
                    config,
                    ready_after_ms=args.ready_after_ms,
                    timeout_ms=timeout_ms,
                    listeners=listeners,
                )
            )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ScanStageError as exc:
        print(f"Progress error: {exc}", file=sys.stderr)
        return 1

    if args.timeline_out is not None:
        write_timeline(args.timeline_out, config, recorder)

    if not args.no_stdout and not args.verbose:
        print(renderer.render(outcome.snapshot))

    if outcome.timed_out:
        print(
            f"Timed out after {args.timeout_s}s with progress at {outcome.snapshot.overall_percent}%",
            file=sys.stderr,
        )
        return 1
    return 0


def _handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def _handle_stages(args: argparse.Namespace) -> int:
    """Print the stage catalog with subtitle counts and expected durations."""
    config = _load_validated_config(args)
    if config is None:
        return 2

    for index, stage in enumerate(config.stages):
        role = "gating" if index == 0 else f"{len(stage.subtitles)} subtitle(s)"
        weight = f" [{stage.weight}]" if stage.weight else ""
        print(f"{index:>2}. {stage.label}{weight} - {role}")
    tuning = config.tuning
    print(
        f"Tuning: gating floor {tuning.min_gating_ms}ms, "
        f"subtitle tick {tuning.subtitle_tick_ms}ms, "
        f"focus rotation {tuning.focus_rotation_ms}ms"
    )
    print(f"Minimum duration: {config.minimum_total_ms}ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
