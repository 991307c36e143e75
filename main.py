from __future__ import annotations

import argparse
import json
import logging
import os

import requests
from dotenv import load_dotenv

from ovirtapi.exceptions import OvirtError
from ovirtapi.ovirt import Ovirt
from ovirtapi.types import Action
from runtime.log_sanitizer import SensitiveDataFormatter
from runtime.runtime_config import load_runtime_config

load_dotenv()
logger = logging.getLogger(__name__)


def setup_logging(min_log_level=logging.INFO, logs_dir="logs"):
    """
    Sets up logging to separate files for each log level.
    Only logs from the specified `min_log_level` and above are saved in their respective files.
    Includes console logging for the same log levels.

    :param min_log_level: Minimum log level to log. Defaults to logging.INFO.
    :param logs_dir: Directory receiving the per-level log files.
    """
    if not os.path.exists(logs_dir):
        os.makedirs(logs_dir)

    if not os.access(logs_dir, os.W_OK):
        raise PermissionError(f"Cannot write to log directory: {logs_dir}")

    log_levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL
    }

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all log levels

    # Request bodies and tokens pass through here when DEBUG_TRANSPORT is on
    log_format = SensitiveDataFormatter("%(asctime)s - %(levelname)s - %(message)s")

    for level_name, level_value in log_levels.items():
        if level_value >= min_log_level:
            log_file = os.path.join(logs_dir, f"{level_name.lower()}.log")
            handler = logging.FileHandler(log_file)
            handler.setLevel(level_value)
            handler.setFormatter(log_format)

            # Add a filter so only logs of this specific level are captured
            handler.addFilter(lambda record, lv=level_value: record.levelno == lv)
            root_logger.addHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(min_log_level)
    console_handler.setFormatter(log_format)
    root_logger.addHandler(console_handler)

    logging.info(f"Logging is set up. Minimum log level: {logging.getLevelName(min_log_level)}")


def connect(config) -> Ovirt:
    """Open an engine connection from the OVIRT section of the runtime config."""
    ovirt_cfg = config.get("OVIRT", {}) if isinstance(config, dict) else {}
    if not ovirt_cfg.get("URL"):
        raise ValueError("oVirt API URL is missing. Set OVIRT_URL in .env.")
    if not (ovirt_cfg.get("USERNAME") and ovirt_cfg.get("PASSWORD")):
        raise ValueError("Missing oVirt credentials. Set OVIRT_USERNAME + OVIRT_PASSWORD.")
    return Ovirt(
        ovirt_cfg["URL"],
        ovirt_cfg["USERNAME"],
        ovirt_cfg["PASSWORD"],
        verify_ssl=ovirt_cfg.get("VERIFY_SSL"),
        ca_file=ovirt_cfg.get("CA_FILE"),
        timeout=ovirt_cfg.get("TIMEOUT"),
        debug=ovirt_cfg.get("DEBUG_TRANSPORT"),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and manage oVirt engine resources")
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose (debug) logging')
    parser.add_argument('--logs-dir', default="logs", help='Directory for per-level log files')
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("info", help="Show engine product information")

    list_cmd = commands.add_parser("list", help="List a collection")
    list_cmd.add_argument("collection", choices=sorted(Ovirt.COLLECTIONS))
    list_cmd.add_argument("--search", help="Engine search query, e.g. 'name=web*'")
    list_cmd.add_argument("--max", type=int, help="Maximum number of results")

    show_cmd = commands.add_parser("show", help="Show one resource")
    show_cmd.add_argument("collection", choices=sorted(Ovirt.COLLECTIONS))
    show_cmd.add_argument("id")

    delete_cmd = commands.add_parser("delete", help="Delete one resource")
    delete_cmd.add_argument("collection", choices=sorted(Ovirt.COLLECTIONS))
    delete_cmd.add_argument("id")
    delete_cmd.add_argument("--async", dest="async_", action="store_true", help="Do not wait for completion")

    action_cmd = commands.add_parser("action", help="Run an action such as start or shutdown")
    action_cmd.add_argument("collection", choices=sorted(Ovirt.COLLECTIONS))
    action_cmd.add_argument("id")
    action_cmd.add_argument("name", help="Engine action name, e.g. start, shutdown, migrate")
    action_cmd.add_argument("--async", dest="async_", action="store_true", help="Do not wait for completion")
    return parser


def run_command(api: Ovirt, args) -> object:
    """Execute a parsed command and return something JSON-serializable."""
    if args.command == "info":
        return api.product_info

    collection = api.collection(args.collection)
    if args.command == "list":
        return [item.to_dict() for item in collection.list(search=args.search, max=args.max)]

    resource = collection.get(args.id)
    if args.command == "show":
        return resource.to_dict()
    if args.command == "delete":
        resource.delete(async_=True if args.async_ else None)
        return {"deleted": args.id}
    if args.command == "action":
        reply = resource.do_action(args.name, Action(async_=True if args.async_ else None))
        return reply.to_dict()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(log_level, logs_dir=args.logs_dir)

    if args.verbose:
        logger.debug("Verbose logging enabled")
    logger.debug("Loading runtime configuration from environment variables")
    try:
        config = load_runtime_config()
        api = connect(config)
    except (ValueError, OvirtError, requests.exceptions.RequestException) as e:
        logger.error(f"Failed to connect to oVirt: {e}")
        return 1

    with api:
        try:
            result = run_command(api, args)
        except (OvirtError, requests.exceptions.RequestException) as e:
            logger.error(f"{args.command} failed: {e}")
            return 1
    print(json.dumps(result, indent=4))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
