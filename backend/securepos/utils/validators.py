"""
Validators — Structural checks applied at the HTTP boundary.

Address validation is shape only (prefix + fixed length). It proves nothing
about who sent the request.
"""
import os
import re

from securepos.errors import InvalidAddressFormat, InvalidUpload


def validate_address(address: str | None, prefix: str = "lsk", length: int = 41) -> bool:
    """Check the wallet address shape: expected prefix and exact length."""
    if not address:
        return False
    return address.startswith(prefix) and len(address) == length


def require_address(address: str | None, prefix: str = "lsk", length: int = 41) -> str:
    if not validate_address(address, prefix, length):
        raise InvalidAddressFormat()
    return address


def file_extension(filename: str | None) -> str:
    if not filename:
        return ""
    return os.path.splitext(filename)[1].lower()


def validate_upload(filename: str | None, size: int, allowed_extensions: list[str], max_bytes: int):
    """Reject uploads with a disallowed extension or above the size cap."""
    if file_extension(filename) not in allowed_extensions:
        raise InvalidUpload()
    if size > max_bytes:
        raise InvalidUpload(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")


def sanitize_filename(filename: str | None) -> str:
    """Replace anything outside [a-zA-Z0-9.-] with underscores."""
    if not filename:
        return "upload"
    return re.sub(r"[^a-zA-Z0-9.-]", "_", os.path.basename(filename))
