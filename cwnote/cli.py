#!/usr/bin/env python3
"""cwnote CLI entrypoint."""

import sys
import argparse
import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from cwnote.lib.config import DEFAULT_LABEL, load_settings
from cwnote.commands import annotate as cmd_annotate_module

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Suffixes like "-prod" start with a dash, which argparse would take for an option
DASH_VALUE_OPTIONS = ("--dashboard-suffix", "--dashboard-prefix")


def get_version() -> str:
    try:
        return version("cwnote")
    except PackageNotFoundError:
        return "unknown"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, stream=sys.stderr)
    # botocore is very chatty at DEBUG
    if level != "DEBUG":
        logging.getLogger("botocore").setLevel(logging.WARNING)


def cmd_annotate(args):
    try:
        settings = load_settings(Path(args.config) if args.config else None)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    configure_logging("DEBUG" if args.verbose else settings.log_level)
    return cmd_annotate_module.cmd_annotate(args, settings)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='cwnote', description='Add annotations to CloudWatch dashboards.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {get_version()}')
    parser.add_argument('--region', help='AWS region (falls back to AWS_REGION / profile if omitted)')
    parser.add_argument('--config', '-c', help='Settings file (default: ./cwnote.env if present)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # cwnote annotate
    p_annotate = subparsers.add_parser('annotate', help='Add vertical annotation to dashboard(s) / widget(s)')
    target = p_annotate.add_mutually_exclusive_group(required=True)
    target.add_argument('--dashboard', help='Single dashboard name to update')
    target.add_argument('--dashboard-suffix', help='Update all dashboards whose name ends with this, e.g. --dashboard-suffix=-prod')
    target.add_argument('--dashboard-prefix', help='Update all dashboards whose name starts with this')
    p_annotate.add_argument('--label', default=None,
                            help=f'Annotation label, e.g. "version", "incident", "deploy" (default: {DEFAULT_LABEL})')
    p_annotate.add_argument('--value', required=True, help='Annotation value, e.g. "1.2.3" or "INC-1234"')
    p_annotate.add_argument('--time', help='Annotation time (RFC 3339). Defaults to now (UTC)')
    p_annotate.add_argument('--dry-run', action='store_true', help="Don't update dashboards, show what would change")
    p_annotate.add_argument('--widget-title-contains', help='Only annotate widgets whose title contains this')
    p_annotate.add_argument('--no-export', action='store_true', help="Don't write export copies of updated dashboards")
    p_annotate.set_defaults(func=cmd_annotate)

    return parser


def join_dash_values(argv: list[str]) -> list[str]:
    """Rewrite `--dashboard-suffix VALUE` as `--dashboard-suffix=VALUE`."""
    result = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in DASH_VALUE_OPTIONS and i + 1 < len(argv):
            result.append(f"{arg}={argv[i + 1]}")
            i += 2
            continue
        result.append(arg)
        i += 1
    return result


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(join_dash_values(sys.argv[1:] if argv is None else list(argv)))
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
