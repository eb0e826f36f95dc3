"""
Main CLI for the anvil tool.

Builds a Cargo project, installs its binary, and optionally vendors its
dependencies for offline rebuilds.
"""

from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

from black_anvil.build.config import PROFILES, VENDOR_DIR, InstallConfig, load_config_file
from black_anvil.build.inspect import inspect_project
from black_anvil.build.orchestrator import InstallOrchestrator
from black_anvil.build.phases import CommandRunner
from black_anvil.core.utils import log


# =============================================================================
# Version
# =============================================================================

__version__ = "0.1.0"


# =============================================================================
# Argument Parsing
# =============================================================================


def _add_target_args(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by install and inspect."""
    parser.add_argument(
        "project_dir",
        nargs="?",
        default=None,
        help="Cargo project directory (default: current directory)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="TOML or YAML config file with project_path, build_type, install_dir, vendor",
    )
    parser.add_argument(
        "--profile",
        choices=PROFILES,
        default=None,
        help="Build profile (default: release)",
    )
    parser.add_argument(
        "--install-dir",
        default=None,
        help="Installation directory (default: ./install)",
    )
    parser.add_argument(
        "--target-platform",
        default=None,
        help="Platform naming convention for the binary, e.g. linux, win32 (default: this host)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="anvil",
        description="Build a Cargo project and install its binary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  install     Build, stage the binary, optionally vendor dependencies
  inspect     Show manifest, artifact location and install state

Examples:
  anvil install                          # Release build of ./ into ./install
  anvil install ../tool --profile debug  # Debug build of another project
  anvil install --vendor                 # Also mirror vendored dependencies
  anvil install -c anvil.toml --dry-run  # Show what a config would do
  anvil inspect                          # Check what would be installed
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- install ---
    install_parser = subparsers.add_parser(
        "install",
        help="Build the project and install its binary",
        description="Build a Cargo project, copy its binary into an install directory, "
        "and optionally mirror its vendored dependencies.",
    )
    _add_target_args(install_parser)
    install_parser.add_argument(
        "--vendor",
        dest="vendor",
        action="store_const",
        const=True,
        default=None,
        help="Run cargo vendor and mirror the result into <install-dir>/vendor",
    )
    install_parser.add_argument(
        "--no-vendor",
        dest="vendor",
        action="store_const",
        const=False,
        help="Do not vendor dependencies (overrides the config file)",
    )
    install_parser.add_argument(
        "--build-tool",
        default=None,
        help="Build tool executable (default: cargo)",
    )
    install_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without executing",
    )
    install_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print phase timings and tracebacks",
    )

    # --- inspect ---
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show manifest, artifact location and install state",
        description="Read the project manifest and report where the binary is expected "
        "and whether it has been installed. Nothing is built or written.",
    )
    _add_target_args(inspect_parser)

    return parser


# =============================================================================
# Config Resolution
# =============================================================================


def resolve_config(args: argparse.Namespace) -> InstallConfig:
    """Build an InstallConfig from defaults, the config file, then flags."""
    config = InstallConfig()

    if args.config is not None:
        config.apply_file_values(load_config_file(args.config))

    if args.project_dir is not None:
        config.project_path = Path(args.project_dir)
    if args.profile is not None:
        config.profile = args.profile
    if args.install_dir is not None:
        config.install_dir = Path(args.install_dir)
    if args.target_platform is not None:
        config.target_platform = args.target_platform

    if getattr(args, "vendor", None) is not None:
        config.vendor = args.vendor
    if getattr(args, "build_tool", None) is not None:
        config.build_tool = args.build_tool
    config.dry_run = getattr(args, "dry_run", False)
    config.verbose = getattr(args, "verbose", False)

    return config


# =============================================================================
# Commands
# =============================================================================


def cmd_install(args: argparse.Namespace, runner: Optional[CommandRunner] = None) -> int:
    config = resolve_config(args)
    result = InstallOrchestrator(config, runner=runner).run()

    log.header("INSTALL COMPLETE")
    log.info(f"Installed {result.destination.name} to {result.destination}")
    if result.mirror is not None:
        log.info(
            f"Vendored dependencies to {config.install_dir / VENDOR_DIR} "
            f"({result.mirror.files} files, {result.mirror.directories} directories)"
        )
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    return inspect_project(
        config.project_path,
        config.profile,
        config.install_dir,
        config.target_platform,
    )


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[list[str]] = None, runner: Optional[CommandRunner] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        log.set_color(False)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "install":
            return cmd_install(args, runner=runner)
        return cmd_inspect(args)

    except KeyboardInterrupt:
        log.warning("Interrupted")
        return 130
    except Exception as e:
        log.error(str(e))
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
