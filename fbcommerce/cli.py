"""Command line interface to the commerce Graph API."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import asyncio
import json
import logging
from pathlib import Path

from fbcommerce.config import (
    get_cmd_parser,
    load_config,
    setup_logging,
)
from fbcommerce.core.events import Event
from fbcommerce.core.graph_api import GraphAPI
from fbcommerce.errors import ApiError, RemoteApiError
from fbcommerce.utils import is_file_readable, mask_token


def read_json_file(path: str):
    """Read a JSON document given on the command line."""
    file_path = Path(path)
    if not is_file_readable(file_path):
        raise ValueError(f"File '{file_path.resolve()}' is not readable")
    with open(file_path, encoding="utf-8") as f:
        return json.load(f)


def sanitize_config(config: dict) -> dict:
    """Return a printable copy of the configuration."""
    sanitized_config = dict(config)
    sanitized_config["access_token"] = mask_token(
        sanitized_config.get("access_token"))
    return sanitized_config


async def run_command(api: GraphAPI, args):
    """Dispatch a command to the Graph API client."""
    if args.command == "get-catalog":
        return await api.get_catalog(args.CATALOG_ID)

    if args.command == "check-catalog":
        return {"valid": await api.is_product_catalog_valid(args.CATALOG_ID)}

    if args.command == "get-user":
        return await api.get_user()

    if args.command == "revoke-permission":
        return await api.revoke_user_permission(args.USER_ID, args.PERMISSION)

    if args.command == "send-items":
        return await api.send_item_updates(args.CATALOG_ID,
                                           read_json_file(args.FILE))

    if args.command == "batch-status":
        return await api.get_batch_status(args.CATALOG_ID, args.HANDLE)

    if args.command == "send-events":
        data = read_json_file(args.FILE)
        if isinstance(data, dict):
            data = [data]
        return await api.send_pixel_events(args.PIXEL_ID,
                                           [Event(item) for item in data])

    raise ValueError(f"Unknown command: {args.command}")


async def main() -> int:
    """Run a single Graph API command."""
    parser = get_cmd_parser()
    args = parser.parse_args()

    mode = "debug" if args.debug else "quiet" if args.quiet else None
    setup_logging(mode)

    if not args.command:
        parser.print_help()
        return 2

    config = load_config(args)

    if not config:
        logging.error("Failed to load configuration. Exiting.")
        return 1

    if args.command == "check-config":
        print(json.dumps(sanitize_config(config), indent=4, default=str))
        return 0

    api = GraphAPI(config["access_token"])
    try:
        result = await run_command(api, args)
    except RemoteApiError as e:
        if e.is_auth_error:
            logging.error("Access token is invalid or expired.")
        elif e.is_permission_error:
            logging.error("Access token lacks the required permission.")
        logging.error(f"Graph API error [{e.code}]: {e.message}")
        return 1
    except ApiError as e:
        logging.error(f"Graph API call failed [{e.code}]: {e.message}")
        return 1
    except (ValueError, json.JSONDecodeError) as e:
        logging.error(f"Invalid input: {e}")
        return 1

    print(json.dumps(result, indent=4, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("KeyboardInterrupt received, shutting down...")
        exit_code = 0
    except Exception:
        logging.exception("Unhandled exception in main loop")
        exit_code = 1

    raise SystemExit(exit_code)
