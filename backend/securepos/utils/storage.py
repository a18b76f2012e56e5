"""
Upload Storage — Keeps submitted sales files on disk under STORAGE_PATH/sales.
The ledger itself stores only digests; these files are informational.
"""
import logging
import os
import time
import uuid

from securepos.utils.validators import sanitize_filename

logger = logging.getLogger(__name__)

SALES_DIR = "sales"


def ensure_storage_directory(storage_path: str) -> str:
    os.makedirs(os.path.join(storage_path, SALES_DIR), exist_ok=True)
    logger.info("Storage directories initialized at: %s", storage_path)
    return storage_path


def save_upload(storage_path: str, filename: str | None, data: bytes) -> str:
    """Write ``data`` to a timestamped file and return its path."""
    directory = os.path.join(storage_path, SALES_DIR)
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}_{sanitize_filename(filename)}")
    with open(path, "wb") as f:
        f.write(data)
    return path


def remove_file(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def cleanup_old_files(directory: str, max_age_seconds: float) -> list[str]:
    """Delete files in ``directory`` whose mtime is older than ``max_age_seconds``."""
    removed = []
    if not os.path.isdir(directory):
        return removed

    now = time.time()
    for name in os.listdir(directory):
        path = os.path.join(directory, name)
        if os.path.isfile(path) and now - os.path.getmtime(path) > max_age_seconds:
            os.remove(path)
            removed.append(name)
            logger.info("Cleaned up old file: %s", name)
    return removed
