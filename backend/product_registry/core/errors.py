"""Error Hierarchy — stable error codes and typed exceptions for registry failures.

Invariants:
    - ErrorCode numeric tags (200-220) are stable across versions; new codes only append
    - Every ErrorCode belongs to exactly one ErrorCategory (CODE_CATEGORIES)
    - Core returns ErrorCode values; only the shell raises RegistryError subclasses
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - IntEnum for codes: the numeric tag IS the wire value, and every member is
      truthy (>= 200) so checks chain with `or`
    - Single hierarchy with RegistryError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from datetime import datetime, timezone


class ErrorCode(IntEnum):
    """Registry error kinds with their stable numeric tags."""
    NOT_AUTHORIZED = 200
    INVALID_SPECIES = 201
    INVALID_ORIGIN = 202
    INVALID_HARVEST_DATE = 203
    INVALID_WEIGHT = 204
    INVALID_DESCRIPTION = 205
    INVALID_STATUS = 206
    ALREADY_EXISTS = 207
    NOT_FOUND = 208
    INVALID_TIMESTAMP = 209
    INVALID_LOCATION = 210
    INVALID_CURRENCY = 211
    INVALID_CERT_ID = 212
    INVALID_UPDATE_PARAM = 213
    MAX_PRODUCTS_EXCEEDED = 214
    INVALID_ROLE = 215
    ALREADY_LINKED = 216
    INVALID_IMAGE_COUNT = 217
    INVALID_IMAGE_URL = 218
    INVALID_PRODUCT_ID = 219
    NOT_ACTIVE = 220
    FEE_TRANSFER_FAILED = 221


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    CAPACITY = "capacity"
    STATE = "state"
    CONFIG = "config"
    EXTERNAL = "external"
    DATABASE = "database"
    INTERNAL = "internal"


CODE_CATEGORIES: dict[ErrorCode, ErrorCategory] = {
    ErrorCode.NOT_AUTHORIZED: ErrorCategory.AUTHORIZATION,
    ErrorCode.INVALID_ROLE: ErrorCategory.AUTHORIZATION,
    ErrorCode.INVALID_SPECIES: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_ORIGIN: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_HARVEST_DATE: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_WEIGHT: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_DESCRIPTION: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_STATUS: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_TIMESTAMP: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_LOCATION: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_CURRENCY: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_CERT_ID: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_IMAGE_COUNT: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_IMAGE_URL: ErrorCategory.VALIDATION,
    ErrorCode.INVALID_PRODUCT_ID: ErrorCategory.VALIDATION,
    ErrorCode.MAX_PRODUCTS_EXCEEDED: ErrorCategory.CAPACITY,
    ErrorCode.NOT_FOUND: ErrorCategory.STATE,
    ErrorCode.NOT_ACTIVE: ErrorCategory.STATE,
    ErrorCode.ALREADY_LINKED: ErrorCategory.STATE,
    ErrorCode.ALREADY_EXISTS: ErrorCategory.STATE,
    ErrorCode.INVALID_UPDATE_PARAM: ErrorCategory.CONFIG,
    ErrorCode.FEE_TRANSFER_FAILED: ErrorCategory.EXTERNAL,
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    caller: str | None = None
    product_id: int | None = None
    ledger_height: int | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        error_code: ErrorCode | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.error_code = error_code

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "error_code": (
                    int(self.error_code) if self.error_code is not None else None
                ),
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "product_id": self.context.product_id,
                    "ledger_height": self.context.ledger_height,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class AuthorizationError(RegistryError):
    """Caller lacks the required role or is not the record's creator."""
    def __init__(self, error_code: ErrorCode, context: ErrorContext | None = None):
        super().__init__(
            f"Caller is not permitted to perform this operation ({error_code.name})",
            error_code.name, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403, error_code,
        )


class MissingCallerError(AuthorizationError):
    """Request carried no caller identity at all."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(ErrorCode.NOT_AUTHORIZED, context)
        self.message = "X-Caller-Identity header is required"
        self.http_status = 401


class FieldValidationError(RegistryError):
    """A product field is out of bounds."""
    def __init__(self, error_code: ErrorCode, context: ErrorContext | None = None):
        super().__init__(
            f"Field validation failed ({error_code.name})",
            error_code.name, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400, error_code,
        )
        self.field = error_code.name.removeprefix("INVALID_").lower()


class CapacityError(RegistryError):
    """Registry or per-creator index is full."""
    def __init__(self, error_code: ErrorCode, context: ErrorContext | None = None):
        super().__init__(
            "Registry capacity exhausted",
            error_code.name, ErrorCategory.CAPACITY,
            ErrorSeverity.ERROR, context, 409, error_code,
        )


class StateError(RegistryError):
    """Record missing, already deactivated, or certification already linked."""
    def __init__(self, error_code: ErrorCode, context: ErrorContext | None = None):
        status = 404 if error_code == ErrorCode.NOT_FOUND else 409
        super().__init__(
            f"Product state does not allow this operation ({error_code.name})",
            error_code.name, ErrorCategory.STATE,
            ErrorSeverity.ERROR, context, status, error_code,
        )


class ConfigError(RegistryError):
    """Admin parameter out of range."""
    def __init__(self, error_code: ErrorCode, context: ErrorContext | None = None):
        super().__init__(
            "Configuration parameter out of range",
            error_code.name, ErrorCategory.CONFIG,
            ErrorSeverity.ERROR, context, 400, error_code,
        )


class FeeTransferError(RegistryError):
    """Fee collaborator refused the creation-fee transfer."""
    def __init__(self, error_code: ErrorCode, context: ErrorContext | None = None):
        super().__init__(
            "Creation fee transfer failed",
            error_code.name, ErrorCategory.EXTERNAL,
            ErrorSeverity.ERROR, context, 402, error_code,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RegistryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


_EXCEPTION_BY_CATEGORY: dict[ErrorCategory, type[RegistryError]] = {
    ErrorCategory.AUTHORIZATION: AuthorizationError,
    ErrorCategory.VALIDATION: FieldValidationError,
    ErrorCategory.CAPACITY: CapacityError,
    ErrorCategory.STATE: StateError,
    ErrorCategory.CONFIG: ConfigError,
    ErrorCategory.EXTERNAL: FeeTransferError,
}


def error_for_code(
    error_code: ErrorCode, context: ErrorContext | None = None,
) -> RegistryError:
    """Build the typed exception for a core ErrorCode."""
    exc_class = _EXCEPTION_BY_CATEGORY[CODE_CATEGORIES[error_code]]
    return exc_class(error_code, context)
