"""BaseError – root of the policy engine error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of every error the policy engine raises.

    ``code`` is a stable slug for log queries; ``detail`` carries structured
    context that :meth:`log_fields` flattens into a structlog event.
    """

    default_code: str = "policy_engine_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def log_fields(self) -> dict[str, Any]:
        """Keyword arguments for a structured log call describing this error."""
        fields: dict[str, Any] = {"error_code": self.code, "error": self.message}
        for key, value in self.detail.items():
            fields.setdefault(key, value)
        if self.cause is not None:
            fields["cause"] = repr(self.cause)
        return fields


__all__ = ["BaseError"]
