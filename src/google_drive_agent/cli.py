"""Command line entry point for the Google Drive knowledge agent."""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .agent import build_session
from .auth.credentials import run_authorization_flow
from .config import AgentSettings, load_settings, DEFAULT_SERVICE_NAME
from .exceptions import ConfigError, UnknownFunctionError, FunctionInputError
from .services.drive import DriveService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL_CHOICES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="google-drive-agent",
        description="Search, read and organize Google Drive documents for an AI agent.",
    )
    parser.add_argument("--env-file", help="Path to a .env file (default: nearest .env).")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        help="Logging verbosity (default: LOG_LEVEL or INFO).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check-config", help="Validate configuration and print a redacted summary.")
    subparsers.add_parser("functions", help="Print the registered functions and their schemas as JSON.")
    subparsers.add_parser("start", help="Validate configuration, build the session and report readiness.")

    call_parser = subparsers.add_parser("call", help="Invoke one function and print its JSON result.")
    call_parser.add_argument("name", help="Function name, e.g. searchFiles.")
    call_parser.add_argument("--args", default="{}", help="JSON object with the call arguments.")

    authorize_parser = subparsers.add_parser("authorize", help="Obtain a refresh token through a browser login.")
    authorize_parser.add_argument("--client-secrets", required=True,
                                  help="OAuth client JSON downloaded from Google Cloud Console.")
    authorize_parser.add_argument("--port", type=int, default=8080, help="Local redirect port.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "functions":
        configure_logging(args.log_level or "WARNING")
        return _print_functions()
    if args.command == "authorize":
        configure_logging(args.log_level or "INFO")
        return _authorize(args.client_secrets, args.port)

    try:
        settings = load_settings(env_file=args.env_file)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please check your .env file.", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level)

    if args.command == "check-config":
        print("Configuration looks good.")
        print(json.dumps(settings.redacted(), indent=2))
        return 0
    if args.command == "start":
        return _start(settings)
    return _call(settings, args.name, args.args)


def _start(settings: AgentSettings) -> int:
    service = DriveService.from_credentials(
        settings.google_client_id,
        settings.google_client_secret,
        settings.google_refresh_token,
    )
    session = build_session(service, settings.service_name)

    logger.info("Session %s ready for gateway %s with functions: %s",
                session.service_name, settings.gateway_url, ", ".join(session.registry.names()))
    print("Google Drive Knowledge Agent online!")
    print("Ready to search, summarize, and organize your documents.")
    return 0


def _print_functions() -> int:
    # Schemas only; the handlers are never called, so no Drive handle is needed
    session = build_session(DriveService(None), DEFAULT_SERVICE_NAME)
    print(json.dumps(session.registry.describe(), indent=2))
    return 0


def _call(settings: AgentSettings, name: str, raw_arguments: str) -> int:
    try:
        arguments = json.loads(raw_arguments)
    except json.JSONDecodeError as e:
        print(f"Error: --args is not valid JSON: {e}", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("Error: --args must be a JSON object", file=sys.stderr)
        return 2

    service = DriveService.from_credentials(
        settings.google_client_id,
        settings.google_client_secret,
        settings.google_refresh_token,
    )
    session = build_session(service, settings.service_name)

    try:
        result = session.registry.invoke(name, arguments)
    except (UnknownFunctionError, FunctionInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2))
    return 0


def _authorize(client_secrets: str, port: int) -> int:
    creds = run_authorization_flow(client_secrets, port=port)
    if not creds.refresh_token:
        print("Error: Google did not return a refresh token.", file=sys.stderr)
        return 1
    print(f"GOOGLE_REFRESH_TOKEN={creds.refresh_token}")
    return 0
