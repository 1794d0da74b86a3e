"""Main module of fbcommerce package."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import asyncio
import logging

from fbcommerce.cli import main


def run():
    """Run the main function of the fbcommerce package."""
    try:
        return asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("KeyboardInterrupt received, shutting down...")
        return 0
    except Exception:
        logging.exception("Unhandled exception in main loop")
        return 1


if __name__ == "__main__":
    raise SystemExit(run())
