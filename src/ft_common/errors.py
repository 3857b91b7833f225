"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Transaction
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid or expired token", 401)


# --- 2xxx: Transaction ---

class TransactionNotFoundError(AppError):
    def __init__(self, transaction_id: str) -> None:
        super().__init__(2001, f"Transaction not found: {transaction_id}", 404)


# --- 9xxx: System ---

class RepositoryError(AppError):
    """The transaction store failed. There is no fallback data source."""

    def __init__(self, detail: str = "Data source unavailable") -> None:
        super().__init__(9003, detail, 503)


class CacheUnavailableError(Exception):
    """Cache backend unreachable, timed out, or returned garbage.

    Not an AppError: it never reaches the HTTP boundary. Callers of the
    cache catch it and fall back to computing the value.
    """
