"""
Error Taxonomy — Typed, recoverable failures raised by the ledger core.

Every error carries a stable ``code`` and the HTTP status the boundary layer
answers with. Nothing here is fatal; the FastAPI exception handler in
``securepos.main`` turns each one into a ``{"success": false, "message"}`` body.
"""


class LedgerError(Exception):
    code = "LEDGER_ERROR"
    status_code = 500

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message())
        self.message = message or self.default_message()

    @classmethod
    def default_message(cls) -> str:
        return "Ledger operation failed"


# ──────────────── Authorization ────────────────

class AuthError(LedgerError):
    code = "AUTH_ERROR"
    status_code = 403


class Unauthenticated(AuthError):
    """The caller's address holds no role at all."""
    code = "UNAUTHENTICATED"
    status_code = 401

    @classmethod
    def default_message(cls) -> str:
        return "Unauthorized: No valid role assigned"


class Forbidden(AuthError):
    """The caller holds a role, but not the one the operation requires."""
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, required_role: str | None = None, message: str | None = None):
        self.required_role = required_role
        if message is None and required_role:
            message = f"Unauthorized: {required_role} role required"
        super().__init__(message)

    @classmethod
    def default_message(cls) -> str:
        return "Unauthorized: insufficient role"


class InvalidRole(AuthError):
    code = "INVALID_ROLE"
    status_code = 400

    @classmethod
    def default_message(cls) -> str:
        return "Invalid role. Must be admin, auditor, or cashier"


class InvalidAddressFormat(AuthError):
    code = "INVALID_ADDRESS_FORMAT"
    status_code = 400

    @classmethod
    def default_message(cls) -> str:
        return "Invalid wallet address format"


class LastAdminError(AuthError):
    code = "LAST_ADMIN"
    status_code = 400

    @classmethod
    def default_message(cls) -> str:
        return "Cannot remove the last remaining admin"


class NotFoundError(AuthError):
    code = "NOT_FOUND"
    status_code = 404

    @classmethod
    def default_message(cls) -> str:
        return "User not found"


# ──────────────── Ledger ────────────────

class DuplicateKeyError(LedgerError):
    code = "DUPLICATE_KEY"
    status_code = 400

    @classmethod
    def default_message(cls) -> str:
        return "Sales record already exists for this date"


class RecordNotFoundError(LedgerError):
    code = "RECORD_NOT_FOUND"
    status_code = 404

    @classmethod
    def default_message(cls) -> str:
        return "No sales record found for the specified store and date"


class MissingFields(LedgerError):
    code = "MISSING_FIELDS"
    status_code = 400

    def __init__(self, fields: list[str] | None = None, message: str | None = None):
        self.fields = fields or []
        if message is None and self.fields:
            message = f"Missing required fields: {', '.join(self.fields)}"
        super().__init__(message)

    @classmethod
    def default_message(cls) -> str:
        return "Required fields are missing"


class InvalidUpload(LedgerError):
    """Upload rejected by the boundary (extension or size)."""
    code = "INVALID_UPLOAD"
    status_code = 400

    @classmethod
    def default_message(cls) -> str:
        return "Invalid file type. Only CSV, JSON, TXT, and XLSX files are allowed."
