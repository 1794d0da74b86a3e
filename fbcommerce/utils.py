"""Utility functions for fbcommerce."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import logging
import re
from pathlib import Path
from urllib.parse import quote, unquote

SHA256_RE = re.compile(r"^[a-f0-9]{64}$")


def is_file_writable(path: Path) -> bool:
    """Check if the file is writable."""
    if path.is_dir():
        logging.debug(f"Path {path.resolve()} is a directory, not a file.")
        return False

    try:
        with open(path, 'ab'):
            pass

    except Exception as e:
        logging.debug(f"Error checking {path.resolve()} file writability: {e}")
        return False

    return True


def is_file_readable(path: Path) -> bool:
    """Check if the file is readable."""
    if not path.exists() or not path.is_file():
        logging.debug(
            f"Path {path.resolve()} does not exist or is not a file.")
        return False
    try:
        with open(path, 'rb'):
            pass

    except Exception as e:
        logging.debug(f"Error checking {path.resolve()} file readability: {e}")
        return False

    return True


def parse_proxy_url(proxy_url: str,
                    user: str = None,
                    password: str = None,
                    default_scheme: str = "http",
                    default_port: int = None) -> str:
    """Parse a proxy URL and return it with credentials applied."""
    regex = re.compile(
        r'^(?:(?P<scheme>\w+)://)?'
        r'(?:(?P<user>[^:@]+)(?::(?P<password>[^@]+))?@)?'
        r'(?P<host>[^:]+)'
        r'(?::(?P<port>\d+))?$'
    )

    match = regex.match(proxy_url)

    if not match:
        return ""

    parts = match.groupdict()

    scheme = parts['scheme'] if parts['scheme'] else default_scheme

    user = user if user else parts['user']
    password = password if password else parts['password']
    host = parts['host']
    port = parts['port'] if parts['port'] else default_port

    if password:
        password = quote(unquote(password))

    auth_part = f"{user}:{password}@" if user and password else (
        f"{user}@" if user else "")
    port_part = f":{port}" if port else ""

    return f"{scheme}://{auth_part}{host}{port_part}"


def detect_prog():
    """Detect the program name."""
    import os
    import sys

    if __package__:
        return f"python -m {__package__}"
    elif sys.argv[0].endswith(".py"):
        return f"python {os.path.basename(sys.argv[0])}"
    else:
        return os.path.basename(sys.argv[0])


def get_app_data_dir(path: str = None) -> Path:
    """Get the application data directory."""
    if not path:
        path = Path.home() / ".fbcommerce"
    else:
        path = Path(path).parent.resolve()

    try:
        path.mkdir(parents=True, exist_ok=True)
    except Exception as e:
        raise IOError(
            f"Cannot create application directory {path.resolve()}") from e
    return path.resolve()


def is_sha256(value) -> bool:
    """Check if the value already looks like a SHA-256 hex digest."""
    return isinstance(value, str) and bool(SHA256_RE.match(value))


def mask_token(token: str) -> str:
    """Keep only the last four characters of a secret."""
    if not token:
        return ""
    if len(token) <= 8:
        return "****"
    return f"****{token[-4:]}"


def mask_headers(headers: dict) -> dict:
    """Return a copy of the headers that is safe to log."""
    masked = dict(headers or {})
    auth = masked.get("Authorization")
    if auth:
        scheme, _, token = auth.partition(" ")
        masked["Authorization"] = f"{scheme} {mask_token(token)}"
    return masked


def sanitize_url(url: str) -> str:
    """Sanitize the URL by masking the password."""
    return re.sub(
        r'(?P<scheme>\w+://)(?P<user>[^:@/\s]+):(?P<password>[^@/\s]+)@',
        r'\g<scheme>\g<user>:****@',
        url
    )
