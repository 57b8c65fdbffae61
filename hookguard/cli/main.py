"""
hookguard CLI — Command-line interface for running file hooks.

Usable directly as a git pre-commit hook:

    hookguard check --staged
"""

import argparse
import sys
from pathlib import Path

import yaml

from hookguard import __version__
from hookguard.config.loader import get_config, list_configs, load_config_from_path
from hookguard.config.models import HookConfig
from hookguard.content.stores import FilesystemContentStore, GitIndexContentStore
from hookguard.core.context import HookChangeset, HookRunRequest
from hookguard.core.engine import get_runner
from hookguard.core.logging import LogChannel, configure_logging, get_logger
from hookguard.hooks import HookRegistry
from hookguard.ir.enums import ChangedFileType, RunStatus
from hookguard.ir.schema import HookRunResult
from hookguard.ir.serialization import save, to_json

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2

# Failures before any hook runs: bad config, unknown hook, no repository.
SETUP_ERRORS = (OSError, KeyError, RuntimeError, ValueError, yaml.YAMLError)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookguard",
        description="Run per-file content hooks over a proposed change",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"hookguard {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Check files against enabled hooks")
    check_parser.add_argument(
        "paths",
        nargs="*",
        help="Files to check, relative to --root (ignored with --staged)",
    )
    check_parser.add_argument(
        "--staged",
        action="store_true",
        help="Check the staged changes of the git repository at --root",
    )
    check_parser.add_argument(
        "--root",
        type=str,
        default=".",
        help="Working tree or repository root (default: .)",
    )
    _add_config_arguments(check_parser)
    check_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Also write the JSON run result to this file",
    )

    # Logging configuration
    check_parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or HOOKGUARD_LOG_LEVEL env var)",
    )
    check_parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (runner,hook,content,config,system). Default: all",
    )

    # Hooks command
    hooks_parser = subparsers.add_parser("hooks", help="List registered hooks")
    _add_config_arguments(hooks_parser)

    return parser


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default="default",
        choices=list_configs(),
        help="Bundled hook config to use (default: default)",
    )
    parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help="Path to a YAML hook config (overrides --config)",
    )


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "check":
        return run_check(args)
    if args.command == "hooks":
        return run_list_hooks(args)

    return 0


def _resolve_config(args: argparse.Namespace) -> HookConfig:
    if args.config_file:
        return load_config_from_path(args.config_file)
    return get_config(args.config)


def run_check(args: argparse.Namespace) -> int:
    """Run the check command."""
    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        channels=channels,
        force=True,
    )

    try:
        runner = get_runner(_resolve_config(args))
        changeset = _build_changeset(args)
    except SETUP_ERRORS as e:
        return _setup_failed(e)

    result = runner.run(HookRunRequest(changeset=changeset))

    if args.format == "json":
        print(to_json(result))
    else:
        print(format_text_output(result))

    if args.output:
        save(result, args.output)

    return exit_code(result)


def _build_changeset(args: argparse.Namespace) -> HookChangeset:
    if args.staged:
        return GitIndexContentStore(args.root).staged_changeset()

    store = FilesystemContentStore(args.root)
    changeset = HookChangeset()
    for path in args.paths:
        changeset.add_file(
            _repo_path(path),
            accessor=store.accessor(path),
            change_type=ChangedFileType.MODIFIED,
        )
    return changeset


def _setup_failed(error: Exception) -> int:
    """Report a config, registry or repository failure as a single line."""
    message = error.args[0] if isinstance(error, KeyError) and error.args else error
    get_logger(LogChannel.SYSTEM).debug("setup_failed", error_type=type(error).__name__)
    print(f"hookguard: error: {message}", file=sys.stderr)
    return EXIT_ERROR


def _repo_path(path: str) -> str:
    """Forward-slash form of a command-line path."""
    return Path(path).as_posix()


def exit_code(result: HookRunResult) -> int:
    if result.status == RunStatus.ACCEPTED:
        return EXIT_ACCEPTED
    if result.status == RunStatus.REJECTED:
        return EXIT_REJECTED
    return EXIT_ERROR


def format_text_output(result: HookRunResult) -> str:
    """One line per rejection or error, then a summary line."""
    lines = []
    for outcome in result.rejections:
        lines.append(f"[{outcome.hook_name}] {outcome.execution.reason}")
        if outcome.execution.rejection.long_description:
            lines.append(f"    {outcome.execution.rejection.long_description}")
    for outcome in result.errors:
        lines.append(f"[{outcome.hook_name}] could not check '{outcome.path}': {outcome.error}")

    lines.append(
        f"{result.status.value}: {result.files_checked} file(s), "
        f"{len(result.rejections)} rejected, {len(result.errors)} error(s)"
    )
    return "\n".join(lines)


def run_list_hooks(args: argparse.Namespace) -> int:
    """List registered hooks and whether the config enables them."""
    try:
        config = _resolve_config(args)
    except SETUP_ERRORS as e:
        return _setup_failed(e)
    for name in HookRegistry.names():
        spec = HookRegistry.get(name)
        state = "enabled" if config.is_enabled(name) else "disabled"
        print(f"{name:<24} {state:<9} {spec.description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
