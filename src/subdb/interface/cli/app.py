from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates a CLI run: logging bootstrap, configuration resolution
(defaults, JSON file, command-line overrides), client construction,
operation dispatch and result rendering.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from subdb.core.client import SubDBClient
from subdb.domain.config import ClientConfig, load_config, validate_config
from subdb.domain.constants import DEFAULT_CLIENT_NAME, __version__
from subdb.domain.errors import ConfigError
from subdb.domain.models import APIResult, ErrorKind, create_error_result
from subdb.infra.fs import default_subtitle_path, normalize_path
from subdb.infra.logging import LoggingConfig, configure_logging
from subdb.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

_INPUT_ERRORS = (
    ErrorKind.MISSING_IDENTITY,
    ErrorKind.FILE_NOT_FOUND,
    ErrorKind.FILE_TOO_SMALL,
    ErrorKind.IO_ERROR,
)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional argument list. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on service errors, 2 on input errors, 130 on Ctrl-C.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(
        level="DEBUG" if args.debug else "WARNING",
        console=True,
        log_file=args.log_file,
    ))

    try:
        base_conf = load_config(args.config_path)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    client = build_client(conf)

    try:
        result, extra = _dispatch(client, args)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if args.json_output:
        payload = result.to_dict()
        payload.update(extra)
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_human(args.command, result, extra)

    return exit_code(result)


def build_client(conf: Dict[str, Any]) -> SubDBClient:
    """
    Create a client from validated configuration.

    The identity is only set when a client URL is configured; name and
    version fall back to this package. Without a URL, network commands
    report MISSING_IDENTITY.
    """
    client = SubDBClient(ClientConfig.from_dict(conf))
    if conf.get("client_url"):
        client.set_user_agent(
            conf.get("client_name") or DEFAULT_CLIENT_NAME,
            conf.get("client_version") or __version__,
            conf["client_url"],
        )
    return client


def exit_code(result: APIResult) -> int:
    if result.ok:
        return EXIT_OK
    if result.error in _INPUT_ERRORS:
        return EXIT_USAGE
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# DISPATCH
# -----------------------------------------------------------------------------

def _dispatch(client: SubDBClient, args: Any) -> tuple[APIResult, Dict[str, Any]]:
    command = args.command
    if command == "languages":
        return client.list_languages(), {}
    if command == "search":
        return client.search(args.file), {}
    if command == "hash":
        return client.fingerprint(args.file), {}
    if command == "upload":
        return client.upload(args.file, args.subtitle), {}
    if command == "download":
        return _download(client, args)
    raise ValueError(f"Unknown command: {command}")


def _download(client: SubDBClient, args: Any) -> tuple[APIResult, Dict[str, Any]]:
    """Download and persist a subtitle; the library itself never writes files."""
    result = client.download(args.file, args.language)
    if not result.ok or args.stdout:
        return result, {}

    dest = normalize_path(args.output) or default_subtitle_path(args.file, args.language)
    if os.path.exists(dest) and not args.overwrite:
        err = FileExistsError(f"Destination exists (use --overwrite): {dest}")
        return create_error_result(ErrorKind.IO_ERROR, str(err), exception=err), {}

    try:
        with open(dest, "wb") as f:
            f.write(result.value)
    except OSError as e:
        return create_error_result(ErrorKind.IO_ERROR, str(e), exception=e), {}

    logger.info(f"Subtitle saved to {dest}")
    return result, {"output_path": dest}

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides for known keys."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human(command: str, result: APIResult, extra: Dict[str, Any]) -> None:
    if not result.ok:
        label = result.error.value if result.error else "error"
        print(f"ERROR ({label}): {result.message}", file=sys.stderr)
        if result.error is ErrorKind.MISSING_IDENTITY:
            print("Set --client-url (or client_url in the config file).", file=sys.stderr)
        return

    if command in ("languages", "search"):
        print(",".join(result.value))
    elif command == "hash":
        print(result.value)
    elif command == "download":
        if "output_path" in extra:
            print(f"Saved: {extra['output_path']}")
        else:
            sys.stdout.flush()
            sys.stdout.buffer.write(result.value)
            sys.stdout.buffer.flush()
    elif command == "upload":
        print("Subtitle uploaded.")


if __name__ == "__main__":
    sys.exit(main())
