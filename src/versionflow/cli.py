"""versionflow CLI: release-version continuity commands."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def _read_versions_file(path: Path) -> List[str]:
    """Read one version per line; blank lines and '#' comments are skipped."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]


def main():
    """Main CLI entry point for versionflow commands."""
    # Get version for --version argument (handle PackageNotFoundError)
    try:
        versionflow_version = get_version("versionflow")
    except PackageNotFoundError:
        versionflow_version = "dev"

    parser = argparse.ArgumentParser(
        prog="versionflow",
        description="versionflow: Reject out-of-sequence release versions"
    )
    parser.add_argument("--version", action="version", version=f"versionflow {versionflow_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check that a version continues the existing releases",
        parents=[parent_parser]
    )
    check_parser.add_argument(
        "candidate",
        help="Proposed version, e.g. 1.2.0 or v2.0-beta1"
    )
    check_parser.add_argument(
        "--existing",
        nargs="*",
        default=[],
        help="Existing released versions"
    )
    check_parser.add_argument(
        "--existing-file",
        type=Path,
        default=None,
        help="File with existing versions, one per line (e.g. 'git tag' output)"
    )
    check_parser.add_argument(
        "--policy",
        choices=["strict", "tiered"],
        default="strict",
        help="Restriction for superseded lines: strict (patch only) or tiered (patch, or patch/minor when only a newer major exists)"
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as canonical JSON"
    )

    # next command
    next_parser = subparsers.add_parser(
        "next",
        help="List the versions that may follow a version",
        parents=[parent_parser]
    )
    next_parser.add_argument(
        "version",
        help="Current version"
    )
    next_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the candidates as canonical JSON"
    )

    # bump command
    bump_parser = subparsers.add_parser(
        "bump",
        help="Increase a version",
        parents=[parent_parser]
    )
    bump_parser.add_argument(
        "version",
        help="Current version"
    )
    bump_parser.add_argument(
        "kind",
        help="One of: alpha, beta, rc, stable, major, next, minor, patch"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "check":
        try:
            from .api import check_continuity
            from ._internal.canonical_json import canonical_dumps

            existing = list(args.existing)
            if args.existing_file is not None:
                existing.extend(_read_versions_file(args.existing_file))
            logger.debug("Checking %s against %d existing versions", args.candidate, len(existing))

            report = check_continuity(args.candidate, existing, policy=args.policy)

            if args.json:
                print(canonical_dumps(report))
            elif not args.quiet:
                status = "OK" if report.ok else "REJECTED"
                print(f"[{status}] {report.candidate}")
                if report.reference is not None:
                    print(f"  Reference: {report.reference}")
                print(f"  Resolution: {report.resolution}")
                print(f"  Possible: {', '.join(report.possible_versions)}")

            sys.exit(0 if report.ok else 1)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "next":
        try:
            from .api import next_versions
            from ._internal.canonical_json import canonical_dumps

            report = next_versions(args.version)
            if args.json:
                print(canonical_dumps(report))
            elif not args.quiet:
                for candidate in report.candidates:
                    print(candidate)
            sys.exit(0)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.command == "bump":
        try:
            from .api import increase_version

            increased = increase_version(args.version, args.kind)
            if not args.quiet:
                print(increased)
            sys.exit(0)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
