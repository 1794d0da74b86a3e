"""Configuration management for fbcommerce."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import argparse
import json
import logging
import os
import sys
import textwrap
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorlog import ColoredFormatter
from dotenv import load_dotenv

from fbcommerce import __description__, __version__
from fbcommerce.helpers.graph_helper import API_VERSION, GRAPH_HOST
from fbcommerce.utils import (
    detect_prog,
    get_app_data_dir,
    is_file_readable,
    is_file_writable,
    parse_proxy_url,
    sanitize_url,
)

_config = {}

DEFAULTS = {
    "api_version": API_VERSION,
    "graph_host": GRAPH_HOST,
    "platform": "woocommerce",
    "platform_version": "unknown",
    "plugin_version": __version__,
    "timeout": 10.0,
}

PROGRAMME = detect_prog()

log_formatter = logging.Formatter('[%(asctime)s] [%(levelname)s] %(message)s')

usage = textwrap.dedent("""\
    %(prog)s version: %(version)s

    Usage:
        %(prog)s [options] command [arguments]

    Options:
        [-config CONFIG] [-token TOKEN] [-api-version VERSION]
        [-graph-host HOST] [-log-file LOG_FILE] [-log-level LEVEL]
        [-debug | -quiet] [ -h | --help ]

    Commands:
        [ get-catalog | check-catalog | get-user | revoke-permission |
          send-items | batch-status | send-events | check-config ]
    """) % {"prog": PROGRAMME, "version": __version__}


class CustomParser(argparse.ArgumentParser):
    """Custom argument parser for fbcommerce."""

    def error(self, message):
        """Override error method to customize error handling."""
        print(usage, file=sys.stderr)
        self.exit(2, f"\nError: {message}\n\n")


def get_cmd_parser() -> CustomParser:
    """Create and return the command line argument parser."""
    app_data_dir = str(get_app_data_dir())
    parser = CustomParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog=PROGRAMME,
        description=__description__,
        usage=usage,
        epilog=textwrap.dedent("""\
        Examples:
            %(prog)s get-user
            %(prog)s get-catalog 2536275516506259
            %(prog)s -api-version v13.0 check-catalog 2536275516506259
            %(prog)s send-items 2536275516506259 items.json
            %(prog)s -config myconfig.json send-events 1964583793745557 """
                               "events.json")
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f" v{__version__} ",
        help=argparse.SUPPRESS
    )

    commands = parser.add_subparsers(
        title='Commands',
        dest="command",
        metavar=""
    )
    catalog = commands.add_parser(
        "get-catalog", help="Show catalog id and name")
    catalog.add_argument("CATALOG_ID", type=str)

    check = commands.add_parser(
        "check-catalog", help="Check that a catalog id is valid")
    check.add_argument("CATALOG_ID", type=str)

    commands.add_parser(
        "get-user", help="Show the user that owns the access token")

    revoke = commands.add_parser(
        "revoke-permission", help="Revoke a permission from a user")
    revoke.add_argument("USER_ID", type=str)
    revoke.add_argument("PERMISSION", type=str)

    items = commands.add_parser(
        "send-items",
        help="Send an items batch read from a JSON file")
    items.add_argument("CATALOG_ID", type=str)
    items.add_argument("FILE", type=str)

    status = commands.add_parser(
        "batch-status", help="Check status of an items batch handle")
    status.add_argument("CATALOG_ID", type=str)
    status.add_argument("HANDLE", type=str)

    events = commands.add_parser(
        "send-events",
        help="Send pixel events read from a JSON file")
    events.add_argument("PIXEL_ID", type=str)
    events.add_argument("FILE", type=str)

    commands.add_parser(
        "check-config",
        help="Check existing configuration and show effective settings"
    )

    parser.add_argument(
        "-config",
        type=str,
        help="Path to configuration file "
        f"(default: <{app_data_dir}>/config.json)"
    )
    parser.add_argument(
        "-token",
        type=str,
        help="Graph API access token "
        "(default: FB_COMMERCE_ACCESS_TOKEN or config access_token)"
    )
    parser.add_argument(
        "-api-version",
        type=str,
        default=None,
        help=f"Graph API version (default: {API_VERSION})"
    )
    parser.add_argument(
        "-graph-host",
        type=str,
        default=None,
        help=f"Graph API host (default: {GRAPH_HOST})"
    )
    parser.add_argument(
        "-log-file",
        type=str,
        help="Log file path"
    )
    parser.add_argument(
        "-log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level for LOG_FILE (default: INFO)"
    )

    parser_log = parser.add_mutually_exclusive_group()
    parser_log.add_argument(
        "-debug",
        action="store_true",
        help="Enable debug mode (CLI only)"
    )
    parser_log.add_argument(
        "-quiet",
        action="store_true",
        help="Suppress all output except errors (CLI only)"
    )

    return parser


def setup_logging(mode: str = None) -> None:
    """Set logging configuration."""
    logger = logging.getLogger()
    logger.handlers.clear()
    if mode == "debug":
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if mode == "quiet":
        return

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG)
    color_formatter = ColoredFormatter(
        "%(log_color)s[%(asctime)s] [%(levelname)s]%(reset)s %(message)s",
        datefmt='%Y-%m-%d %H:%M:%S',
        log_colors={
            'DEBUG': 'white',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red,bg_white',
        }
    )
    stderr_handler.setFormatter(color_formatter)
    logger.addHandler(stderr_handler)


def setup_file_logging(log_cfg: dict) -> bool:
    """Attach a rotating log file handler."""
    log_file = Path(log_cfg["log_file"]).resolve()
    if not is_file_writable(log_file):
        logging.error(f"Log file path '{log_file}' is not writable.")
        logging.error("Logging into the file will be disabled.")
        return False

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding='utf-8'
    )
    file_handler.setLevel(getattr(logging, log_cfg["log_level"]))
    file_handler.setFormatter(log_formatter)
    logging.getLogger().addHandler(file_handler)
    logging.info("Logging to file: %s", log_file)
    return True


def load_config(args, path=None) -> dict:
    """Load configuration from file, environment and command line."""
    global _config
    app_data_dir = get_app_data_dir()
    load_dotenv(dotenv_path=app_data_dir / ".env", override=True)

    explicit_path = path or getattr(args, "config", None) or \
        os.getenv("FB_COMMERCE_CONFIG_FILE")
    config_path = Path(explicit_path or app_data_dir / "config.json").resolve()

    file_config = {}
    if is_file_readable(config_path):
        with open(config_path, encoding="utf-8") as f:
            try:
                file_config = json.load(f)
            except json.JSONDecodeError as e:
                logging.error(f"Error decoding JSON from config file: {e}")
                return {}
        if not isinstance(file_config, dict):
            logging.error("Config file must contain a JSON object.")
            return {}
        logging.debug(f"Loaded config file {config_path}")
    elif explicit_path:
        logging.error(
            f"Config file '{config_path}' not found or not readable!")
        return {}

    config = dict(DEFAULTS)
    config.update(file_config)

    token = getattr(args, "token", None) or \
        os.getenv("FB_COMMERCE_ACCESS_TOKEN") or config.get("access_token")
    if not token or not isinstance(token, str):
        logging.error("Missing Graph API access token.")
        logging.error("Use '-token', FB_COMMERCE_ACCESS_TOKEN or "
                      "'access_token' in the config file.")
        return {}
    config["access_token"] = token

    api_version = getattr(args, "api_version", None) or \
        os.getenv("FB_COMMERCE_API_VERSION") or config.get("api_version")
    if not isinstance(api_version, str) or not api_version.startswith("v"):
        logging.error(f"Invalid Graph API version: {api_version}")
        return {}
    config["api_version"] = api_version

    graph_host = getattr(args, "graph_host", None) or \
        os.getenv("FB_COMMERCE_GRAPH_HOST") or config.get("graph_host")
    if not graph_host or not isinstance(graph_host, str) or \
            "/" in graph_host:
        logging.error(f"Invalid Graph API host: {graph_host}")
        return {}
    config["graph_host"] = graph_host

    try:
        config["timeout"] = float(config.get("timeout"))
    except (TypeError, ValueError):
        logging.error("Timeout must be a number.")
        return {}

    for key in ("platform", "platform_version", "plugin_version"):
        if not isinstance(config.get(key), str):
            logging.error(f"'{key}' must be a string.")
            return {}

    https_proxy = os.getenv("https_proxy") or \
        os.getenv("HTTPS_PROXY") or config.get("https_proxy")
    if isinstance(https_proxy, dict):
        https_proxy = parse_proxy_url(https_proxy.get("url", ""),
                                      https_proxy.get("username"),
                                      https_proxy.get("password"))
        if not https_proxy:
            logging.error("Invalid HTTPS proxy URL.")
            return {}
    if https_proxy:
        logging.info("HTTPS proxy set to: %s", sanitize_url(https_proxy))
    config["https_proxy"] = https_proxy or None

    log_cfg = config.get("logging")
    if not isinstance(log_cfg, dict):
        log_cfg = {}
    if getattr(args, "log_file", None):
        log_cfg["log_file"] = args.log_file
    if getattr(args, "log_level", None):
        log_cfg["log_level"] = args.log_level

    if "log_level" in log_cfg and "log_file" not in log_cfg:
        log_cfg["log_file"] = str(config_path.parent / "fbcommerce.log")
    if "log_file" in log_cfg:
        level = str(log_cfg.get("log_level", "INFO")).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            logging.warning(f"Invalid log level: {level}"
                            ", defaulting to INFO.")
            level = "INFO"
        log_cfg["log_level"] = level
        setup_file_logging(log_cfg)
    config["logging"] = log_cfg

    _config = config
    return _config


def get_config() -> dict:
    """Return the current configuration."""
    return _config if _config else {}


def get_config_value(key: str, default=None) -> any:
    """Return the value of the specified configuration key."""
    if key in _config:
        return _config[key]
    elif default is None:
        return DEFAULTS.get(key)
    else:
        return default


def set_config_value(key: str, value: any) -> None:
    """Set the value of the specified configuration key."""
    _config[key] = value


def get_partner_agent() -> str:
    """Return the partner agent string sent along with pixel events."""
    return "-".join((
        str(get_config_value("platform")),
        str(get_config_value("platform_version")),
        str(get_config_value("plugin_version")),
    ))


if __name__ == "__main__":
    print("Cannot run this script directly. Please use the main.py script.")
    sys.exit(1)
