from securepos.utils.validators import validate_address, require_address, validate_upload, sanitize_filename
from securepos.utils.storage import ensure_storage_directory, save_upload, cleanup_old_files

__all__ = [
    "validate_address", "require_address", "validate_upload", "sanitize_filename",
    "ensure_storage_directory", "save_upload", "cleanup_old_files",
]
