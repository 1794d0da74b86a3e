"""Core Graph API operations."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------
