"""CLI entry point for remote workflow control."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

from workflow_control.config import ForgeConfig, load_config
from workflow_control.contents import FilePublisher, read_local_file
from workflow_control.errors import ApiError, WorkflowControlError
from workflow_control.models.request import DispatchRequest, FileTarget
from workflow_control.models.result import (
    Dispatched,
    Listed,
    OperationResult,
    Published,
    Status,
)
from workflow_control.operations import WorkflowOperations
from workflow_control.transport import HttpTransport

DEFAULT_WORKFLOW_FILE = ".github/workflows/codeql-manual.yml"
DEFAULT_WORKFLOW = "codeql-manual.yml"
DEFAULT_SUBJECT = "CodeQL manual trigger workflow"
QUERY_PACKS = ("security-extended", "security-and-quality", "default")

log = logging.getLogger("workflow_control")


def parse_bool(value: str) -> bool:
    """Parse a ``true``/``false`` flag value."""
    lowered = value.strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def parse_inputs(pairs: Sequence[str]) -> Mapping[str, str]:
    """Parse repeated ``KEY=VALUE`` workflow inputs."""
    inputs: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        inputs[key.strip()] = value
    return inputs


def build_dispatch_request(args: argparse.Namespace) -> DispatchRequest:
    """Build the CodeQL dispatch inputs, extended by any ``--input`` pairs."""
    inputs: dict[str, str | bool] = {
        "languages": args.languages,
        "queries": args.queries,
        "upload_sarif": str(args.upload_sarif).lower(),
    }
    inputs.update(parse_inputs(args.input))
    return DispatchRequest(ref=args.ref, inputs=inputs)


def actions_url(config: ForgeConfig) -> str | None:
    """Return the web URL of the repository's Actions page, if the host is known."""
    if config.web_base_url is None:
        return None
    return f"{config.web_base_url}/{config.repository.full_name}/actions"


def log_result_summary(log: logging.Logger, result: OperationResult) -> None:
    """Log a human-readable summary of an operation result."""
    match result:
        case Dispatched():
            log.info("✅ Workflow %s triggered on %s", result.workflow, result.ref)
            log.info("  Run identity is not reported by the API")
        case Published():
            verb = "Created" if result.created else "Updated"
            log.info("✅ %s %s on %s", verb, result.path, result.branch)
            if result.commit.html_url:
                log.info("  Commit: %s", result.commit.html_url)
            if result.html_url:
                log.info("  File: %s", result.html_url)
        case Status():
            workflow = result.workflow
            log.info("Workflow Details:")
            log.info("  Name: %s", workflow.name)
            log.info("  State: %s", workflow.state)
            log.info("  Path: %s", workflow.path)
            log.info("  ID: %s", workflow.id)
            log.info("  Created: %s", workflow.created_at.isoformat())
            log.info("  Updated: %s", workflow.updated_at.isoformat())
        case Listed():
            log.info("Found %d workflow(s):", len(result.workflows))
            for index, workflow in enumerate(result.workflows, start=1):
                symbol = "🟢" if workflow.state == "active" else "🔴"
                log.info("%d. %s %s", index, symbol, workflow.name)
                log.info("  File: %s", workflow.path)
                log.info("  State: %s", workflow.state)
                log.info("  ID: %s", workflow.id)
        case _:
            log.info("✅ Workflow %s %s", result.workflow, result.kind)


def format_output(result: OperationResult) -> dict[str, Any]:
    """Format an operation result for JSON output."""
    match result:
        case Status():
            return {
                "kind": result.kind,
                "workflow": result.workflow.model_dump(mode="json"),
            }
        case Listed():
            return {
                "kind": result.kind,
                "total": len(result.workflows),
                "workflows": [w.model_dump(mode="json") for w in result.workflows],
            }
        case Published():
            output = asdict(result)
            output["commit"] = result.commit.model_dump(mode="json")
            return output
        case Dispatched():
            return {
                "kind": result.kind,
                "workflow": result.workflow,
                "ref": result.ref,
                "inputs": dict(result.inputs),
            }
        case _:
            return asdict(result)


async def execute(
    config: ForgeConfig, args: argparse.Namespace, content: bytes = b""
) -> OperationResult:
    """Run the selected command against the forge."""
    async with HttpTransport.from_config(config) as transport:
        if args.command == "push":
            publisher = FilePublisher.for_repository(transport, config.repository)
            return await publisher.publish(
                FileTarget(path=args.path or args.file.as_posix()),
                content,
                args.subject,
            )

        operations = WorkflowOperations(
            transport=transport, repository=config.repository
        )
        match args.command:
            case "dispatch":
                return await operations.dispatch(
                    args.workflow, build_dispatch_request(args)
                )
            case "enable":
                return await operations.enable(args.workflow)
            case "disable":
                return await operations.disable(args.workflow)
            case "status":
                return await operations.status(args.workflow)
            case "list":
                return await operations.list()
            case _:
                raise ValueError(f"Unknown command: {args.command}")


async def run(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    """Run one command and return the process exit code."""
    try:
        config = load_config(
            environ,
            repository=args.repository,
            branch=getattr(args, "branch", "main"),
            api_base_url=args.api_url,
        )
        content = b""
        if args.command == "push":
            content = read_local_file(args.file)
            log.info("Read workflow file %s (%d bytes)", args.file, len(content))

        result = await execute(config, args, content)
    except ApiError as exc:
        log.error("❌ %s failed: %s", args.command, exc)
        if exc.hint:
            log.error("%s", exc.hint)
        return 1
    except WorkflowControlError as exc:
        log.error("❌ %s failed: %s", args.command, exc)
        return 1

    log_result_summary(log, result)
    if isinstance(result, Dispatched | Published) and (url := actions_url(config)):
        log.info("  Actions: %s", url)
    print(json.dumps(format_output(result), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Push, dispatch, and manage GitHub Actions workflows"
    )
    parser.add_argument(
        "--repository",
        help="Target repository in OWNER/REPO format (default: $GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--api-url",
        help="API base URL (default: $GITHUB_API_URL or https://api.github.com)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    push = commands.add_parser("push", help="Create or update a workflow file")
    push.add_argument(
        "--file",
        type=Path,
        default=Path(DEFAULT_WORKFLOW_FILE),
        help=f"Local workflow file (default: {DEFAULT_WORKFLOW_FILE})",
    )
    push.add_argument(
        "--path", help="Repository path to write (default: same as --file)"
    )
    push.add_argument("--branch", default="main", help="Target branch (default: main)")
    push.add_argument(
        "--subject",
        default=DEFAULT_SUBJECT,
        help=f"Commit message subject (default: {DEFAULT_SUBJECT})",
    )

    dispatch = commands.add_parser("dispatch", help="Trigger a workflow run")
    dispatch.add_argument(
        "--workflow",
        default=DEFAULT_WORKFLOW,
        help=f"Workflow file name or id (default: {DEFAULT_WORKFLOW})",
    )
    dispatch.add_argument(
        "--languages",
        default="javascript-typescript,actions",
        help="Languages to analyze, comma-separated "
        "(default: javascript-typescript,actions)",
    )
    dispatch.add_argument(
        "--queries",
        default="security-extended",
        choices=QUERY_PACKS,
        help="Query pack to use (default: security-extended)",
    )
    dispatch.add_argument(
        "--upload-sarif",
        type=parse_bool,
        default=True,
        help="Upload SARIF to the Security tab (default: true)",
    )
    dispatch.add_argument("--ref", default="main", help="Branch to run on (default: main)")
    dispatch.add_argument(
        "--input",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Additional workflow input, may be repeated",
    )

    for name, text in (
        ("enable", "Enable a workflow"),
        ("disable", "Disable a workflow"),
        ("status", "Show a workflow's details"),
    ):
        command = commands.add_parser(name, help=text)
        command.add_argument("workflow", help="Workflow file name or id")

    commands.add_parser("list", help="List all workflows")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "dispatch":
        try:
            parse_inputs(args.input)
        except argparse.ArgumentTypeError as exc:
            parser.error(str(exc))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(args, os.environ))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
