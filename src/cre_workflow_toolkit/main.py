"""CLI entrypoint for the workflow toolkit.

Each subcommand is independent and prints exactly one JSON line on stdout,
except `simulate` (streams the CRE CLI), `templates show` (raw source) and the
plain `chain-selectors` table.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cre_workflow_toolkit import __version__
from cre_workflow_toolkit.analysis.limits import analyze_limits
from cre_workflow_toolkit.chains import (
    CHAINS,
    ChainListResult,
    ChainLookupResult,
    ChainRecord,
    find_chain,
    format_table,
)
from cre_workflow_toolkit.config import ToolkitSettings
from cre_workflow_toolkit.cre.client import CreCli
from cre_workflow_toolkit.cre.simulate import prepare_simulation, run_simulation
from cre_workflow_toolkit.documentation.fetcher import DocsFetcher
from cre_workflow_toolkit.logging import configure_logging
from cre_workflow_toolkit.results import Failure, ToolResult
from cre_workflow_toolkit.scaffold import (
    ScaffoldResult,
    TemplateListResult,
    UnknownTemplateError,
    list_templates,
    read_template,
    scaffold_template,
)
from cre_workflow_toolkit.validation.structure import validate_workflow_structure

logger = logging.getLogger(__name__)


def _emit(result: ToolResult) -> int:
    print(result.to_json())
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cre-toolkit",
        description="Helpers for building, checking and simulating CRE workflows",
    )
    parser.add_argument(
        "--version", action="version", version=f"cre-workflow-toolkit {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_cli = subparsers.add_parser(
        "check-cli", help="Report whether the CRE CLI is installed and its version"
    )
    check_cli.add_argument("--binary", default=None, help="CRE CLI executable (default: cre)")

    validate = subparsers.add_parser("validate", help="Validate a workflow directory layout")
    validate.add_argument("path", nargs="?", default=".", help="Workflow directory")

    analyze = subparsers.add_parser(
        "analyze-limits",
        help="Count heuristic indicators of per-execution quota violations",
    )
    analyze.add_argument("path", nargs="?", default=".", help="Workflow directory")

    fetch_docs = subparsers.add_parser(
        "fetch-docs", help="Download the full CRE documentation to a local file"
    )
    fetch_docs.add_argument("--url", default=None, help="Documentation URL")
    fetch_docs.add_argument("--output", default=None, help="Destination file")

    simulate = subparsers.add_parser(
        "simulate",
        help="Run `cre workflow simulate` for a workflow directory",
        description=(
            "Arguments after the workflow path are forwarded to the CRE CLI unchanged, "
            "so options of this command must come before the path."
        ),
    )
    simulate.add_argument("path", nargs="?", default=".", help="Workflow directory")
    simulate.add_argument("extra_args", nargs=argparse.REMAINDER, help="Arguments for the CRE CLI")
    simulate.add_argument("--binary", default=None, help="CRE CLI executable (default: cre)")
    simulate.add_argument(
        "--default-target",
        default=None,
        help="Target used when the forwarded arguments carry no --target",
    )
    simulate.add_argument(
        "--no-default-target",
        action="store_true",
        help="Never add a --target flag to the forwarded arguments",
    )

    chains = subparsers.add_parser(
        "chain-selectors", help="List supported chain selectors or look one up"
    )
    chains.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Chain name, selector name or numeric selector id",
    )
    chains.add_argument("--json", action="store_true", help="Print the table as JSON")

    templates = subparsers.add_parser("templates", help="Bundled TypeScript workflow templates")
    template_commands = templates.add_subparsers(dest="template_command", required=True)
    template_commands.add_parser("list", help="List bundled templates")
    show = template_commands.add_parser("show", help="Print a template's source")
    show.add_argument("name", help="Template name, e.g. workflow-cron")
    scaffold = template_commands.add_parser(
        "scaffold", help="Write a template as src/index.ts of a workflow directory"
    )
    scaffold.add_argument("name", help="Template name, e.g. workflow-cron")
    scaffold.add_argument("destination", nargs="?", default=".", help="Workflow directory")
    scaffold.add_argument(
        "--force", action="store_true", help="Overwrite an existing entry point"
    )

    return parser


def _forwarded_args(extra_args: list[str]) -> list[str]:
    if extra_args and extra_args[0] == "--":
        return extra_args[1:]
    return extra_args


def _run_templates(args: argparse.Namespace) -> int:
    try:
        if args.template_command == "list":
            return _emit(TemplateListResult.from_catalog(list_templates()))

        if args.template_command == "show":
            sys.stdout.write(read_template(args.name))
            return 0

        if args.template_command == "scaffold":
            target = scaffold_template(args.name, Path(args.destination), force=args.force)
            return _emit(ScaffoldResult(template=args.name, file=str(target)))

    except UnknownTemplateError as e:
        return _emit(Failure(error=str(e)))
    except FileExistsError as e:
        return _emit(Failure(error=f"{e} (use --force to overwrite)"))

    logger.error("Unknown templates command", extra={"command": args.template_command})
    return 2


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ToolkitSettings()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_format)
    logger.debug("Starting command", extra={"command": args.command})

    try:
        if args.command == "check-cli":
            cli = CreCli(
                binary=args.binary or settings.cre_binary,
                version_timeout_seconds=settings.version_timeout_seconds,
            )
            return _emit(cli.status())

        if args.command == "validate":
            # Invalid layouts are reported in the body; the command itself succeeded.
            _emit(validate_workflow_structure(args.path))
            return 0

        if args.command == "analyze-limits":
            return _emit(analyze_limits(args.path))

        if args.command == "fetch-docs":
            fetcher = DocsFetcher(
                url=args.url or settings.docs_url,
                output_path=Path(args.output) if args.output else settings.docs_output_path,
                timeout_seconds=settings.docs_timeout_seconds,
            )
            try:
                return _emit(fetcher.fetch())
            finally:
                fetcher.close()

        if args.command == "simulate":
            cli = CreCli(
                binary=args.binary or settings.cre_binary,
                version_timeout_seconds=settings.version_timeout_seconds,
            )
            plan = prepare_simulation(
                args.path,
                _forwarded_args(args.extra_args),
                cli=cli,
                default_target=args.default_target or settings.simulate_default_target,
                inject_default_target=settings.simulate_inject_target
                and not args.no_default_target,
            )
            if isinstance(plan, Failure):
                return _emit(plan)
            return run_simulation(plan, cli=cli)

        if args.command == "chain-selectors":
            if args.query is not None:
                chain = find_chain(args.query)
                if chain is None:
                    return _emit(Failure(error=f"Unknown chain: {args.query}"))
                return _emit(ChainLookupResult.from_entry(chain))
            if args.json:
                return _emit(ChainListResult(chains=[ChainRecord.from_entry(c) for c in CHAINS]))
            print(format_table())
            return 0

        if args.command == "templates":
            return _run_templates(args)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
