"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Quote input
  2xxx: Maker balance cache
  9xxx: System

Per-maker anomalies (stale samples, null balances, mixed batches) are logged
and priced as zero; they never surface as exceptions.
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


# --- 1xxx: Quote input ---

class InvalidAssetDataError(AppError):
    def __init__(self, asset_data: str, reason: str) -> None:
        super().__init__(1001, f"Invalid asset data {asset_data!r}: {reason}", 422)


class InvalidQuoteAmountError(AppError):
    def __init__(self, field: str, value: object) -> None:
        super().__init__(
            1002,
            f"Invalid {field}: {value!r} is not a non-negative integer amount",
            422,
        )


# --- 2xxx: Maker balance cache ---

class CacheUnavailableError(AppError):
    def __init__(self, token_address: str, detail: str) -> None:
        super().__init__(
            2001,
            f"Maker balance cache unavailable for token {token_address}: {detail}",
            503,
        )


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
