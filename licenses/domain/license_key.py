"""
License key generation.

Keys are opaque bearer strings; nothing about them is signed or
verified beyond an exact lookup.
"""

import secrets

LICENSE_KEY_PREFIX = "KEY"


def generate_license_key(prefix: str = LICENSE_KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXXXXXX-XXXX-XXXX.

    Args:
        prefix: Key prefix (default 'KEY')

    Returns:
        Generated license key string
    """
    body = secrets.token_hex(8).upper()
    return f"{prefix}-{body[:8]}-{body[8:12]}-{body[12:]}"
