from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the `subdb` command line schema (global options plus one
subcommand per service operation) and translates the parsed namespace
into configuration overrides.
"""

import argparse
from typing import Any, Dict

from subdb.domain.constants import __version__

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the SubDB CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="subdb",
        description="Search, download and upload subtitles on SubDB.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Client Identity ---
    p.add_argument("--client-name", dest="client_name", default=None,
                   help="Client name sent in the User-Agent.")
    p.add_argument("--client-version", dest="client_version", default=None,
                   help="Client version sent in the User-Agent.")
    p.add_argument("--client-url", dest="client_url", default=None,
                   help="Client homepage sent in the User-Agent (required for network commands).")

    # --- Configuration ---
    p.add_argument("--config", dest="config_path", default=None,
                   help="Path to a JSON configuration file.")
    p.add_argument("--read-endpoint", dest="read_endpoint", default=None,
                   help="Base URL for languages, search and download.")
    p.add_argument("--upload-endpoint", dest="upload_endpoint", default=None,
                   help="Base URL for upload.")
    p.add_argument("--timeout", dest="read_timeout", type=float, default=None,
                   help="Timeout in seconds for read requests.")
    p.add_argument("--upload-timeout", dest="upload_timeout", type=float, default=None,
                   help="Timeout in seconds for uploads (default: none).")

    # --- Output and Diagnostics ---
    p.add_argument("--json", dest="json_output", action="store_true",
                   help="Print the result as JSON.")
    p.add_argument("--debug", action="store_true",
                   help="Elevate logging verbosity to DEBUG.")
    p.add_argument("--log-file", dest="log_file", default=None,
                   help="Also write logs to this rotating file.")

    # --- Operations ---
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser("languages", help="List languages available in the database.")

    search = sub.add_parser("search", help="List subtitle languages for a media file.")
    search.add_argument("file", help="Media file.")

    download = sub.add_parser("download", help="Download a subtitle for a media file.")
    download.add_argument("file", help="Media file.")
    download.add_argument("language", help="Two-letter language code.")
    download.add_argument("-o", "--output", dest="output", default=None,
                          help="Destination file (default: <media>.<lang>.srt).")
    download.add_argument("--stdout", action="store_true",
                          help="Print the subtitle instead of writing a file.")
    download.add_argument("--overwrite", action="store_true",
                          help="Replace an existing destination file.")

    upload = sub.add_parser("upload", help="Upload a subtitle for a media file.")
    upload.add_argument("file", help="Media file.")
    upload.add_argument("subtitle", help="Subtitle file to upload.")

    hash_cmd = sub.add_parser("hash", help="Print the fingerprint of a media file.")
    hash_cmd.add_argument("file", help="Media file.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the parsed namespace into configuration overrides.

    Unset options are kept as None; the merge step skips them.
    """
    return {
        "read_endpoint": args.read_endpoint,
        "upload_endpoint": args.upload_endpoint,
        "read_timeout": args.read_timeout,
        "upload_timeout": args.upload_timeout,
        "client_name": args.client_name,
        "client_version": args.client_version,
        "client_url": args.client_url,
    }
