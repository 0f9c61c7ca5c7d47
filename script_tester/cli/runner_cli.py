"""
Command-line interface for running a transform script over records.

Usage:
    script-tester [options] <script file>
    python -m script_tester.cli.runner_cli [options] <script file>
"""

import argparse
import sys
from pathlib import Path
from typing import Sequence

from script_tester.batch.pipeline import ScriptPipeline
from script_tester.core.errors import ScriptTesterError, UsageError
from script_tester.core.models import RunConfiguration, parse_module_paths
from script_tester.core.transforms import dialect_for
from script_tester.observability import metrics
from script_tester.observability.logger import configure_logging, get_logger


logger = get_logger(__name__)


class _ScriptTesterParser(argparse.ArgumentParser):
    """Argument parser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


class _EnableFlags(argparse.Action):
    """Set several boolean destinations at once, in command-line order."""

    def __init__(self, option_strings, dest, flags=(), **kwargs):
        self.flags = tuple(flags)
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        for flag in self.flags:
            setattr(namespace, flag, True)


def build_parser() -> argparse.ArgumentParser:
    """Build the single-dash option parser."""
    parser = _ScriptTesterParser(
        prog="script-tester",
        description="Run records through a transform script and inspect where they were routed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  # Send stdin as a single record and show what reached success
  echo "hello" | script-tester -attrs -content scripts/upper.py

  # Send every file in a directory, keep the results
  script-tester -input=data/in -outputSuccess=data/ok -outputFailure=data/bad scripts/route.py

  # Route with declarative rules instead of a script
  script-tester -all -input=data/in -attrfile=config/source.properties rules/incoming.yaml
        """,
    )

    parser.add_argument(
        "-success", dest="report_success", action="store_true", default=True,
        help="Output information about records transferred to success (default)",
    )
    parser.add_argument(
        "-no-success", dest="report_success", action="store_false",
        help="Do not output information about records transferred to success",
    )
    parser.add_argument(
        "-failure", dest="report_failure", action="store_true", default=False,
        help="Output information about records transferred to failure",
    )
    parser.add_argument(
        "-content", dest="include_content", action="store_true", default=False,
        help="Output record contents",
    )
    parser.add_argument(
        "-attrs", dest="include_attributes", action="store_true", default=False,
        help="Output record attributes",
    )
    parser.add_argument(
        "-all-rels", dest="_all_rels", action=_EnableFlags,
        flags=("report_success", "report_failure"),
        help="Output information about records transferred to any outcome",
    )
    parser.add_argument(
        "-all", dest="_all", action=_EnableFlags,
        flags=("report_success", "report_failure", "include_content", "include_attributes"),
        help="Output content and attributes of records transferred to any outcome",
    )
    parser.add_argument(
        "-input", dest="input_dir", metavar="<directory>",
        help="Send each file in the directory as a record to the script",
    )
    parser.add_argument(
        "-outputSuccess", dest="success_dir", metavar="<directory>",
        help="Store records transferred to success within this directory",
    )
    parser.add_argument(
        "-outputFailure", dest="failure_dir", metavar="<directory>",
        help="Store records transferred to failure within this directory",
    )
    parser.add_argument(
        "-outputAttributes", dest="attributes_dir", metavar="<directory>",
        help="Store a JSON attribute document per processed record within this directory",
    )
    parser.add_argument(
        "-modules", dest="modules", metavar="<paths>",
        help="Comma-separated list of paths (files or directories) containing script modules",
    )
    parser.add_argument(
        "-attrfile", dest="attribute_file", metavar="<path>",
        help="Path to a properties file specifying attributes to add to incoming records",
    )
    parser.add_argument(
        "script", nargs="?", metavar="<script file>",
        help="Transform script; the extension selects the dialect (.py, .yaml/.yml)",
    )
    return parser


def parse_configuration(argv: Sequence[str] | None = None, parser: argparse.ArgumentParser | None = None) -> RunConfiguration:
    """
    Turn command-line arguments into a RunConfiguration.

    Raises:
        UsageError: If the arguments are malformed or the script is missing
    """
    parser = parser or build_parser()
    args = parser.parse_args(argv)

    if not args.script:
        raise UsageError("missing required <script file> argument")

    def optional_path(value: str | None) -> Path | None:
        return Path(value) if value else None

    return RunConfiguration(
        script_path=Path(args.script),
        dialect=dialect_for(args.script),
        module_paths=parse_module_paths(args.modules),
        input_dir=optional_path(args.input_dir),
        success_dir=optional_path(args.success_dir),
        failure_dir=optional_path(args.failure_dir),
        attributes_dir=optional_path(args.attributes_dir),
        attribute_file=optional_path(args.attribute_file),
        report_success=args.report_success,
        report_failure=args.report_failure,
        include_attributes=args.include_attributes,
        include_content=args.include_content,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    configure_logging()
    parser = build_parser()

    try:
        config = parse_configuration(argv, parser)
    except UsageError as e:
        sys.stderr.write(f"{parser.prog}: {e.message}\n")
        parser.print_help(sys.stderr)
        return e.exit_code

    logger.debug(f"Run configuration: {config.model_dump(mode='json')}")

    try:
        summary = ScriptPipeline(config).execute()
    except ScriptTesterError as e:
        logger.error(e.message, extra={"error_type": type(e).__name__, "exit_code": e.exit_code})
        return e.exit_code
    finally:
        metrics.write_metrics_file()

    if summary["write_errors"]:
        logger.warning(f"{len(summary['write_errors'])} records could not be written")
    return 0


if __name__ == "__main__":
    sys.exit(main())
