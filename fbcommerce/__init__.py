"""Initialization of fbcommerce package."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

__version__ = "2.6.13"
__title__ = "fbcommerce"
__author__ = "sh0rch"
__author_email__ = "sh0rch@iwl.dev"
__license__ = "MIT"
__license_url__ = "https://opensource.org/licenses/MIT"
__description__ = "Graph API client for commerce catalog sync, product " \
    "batch upserts and server-side pixel events."
