"""Service-level errors. Route handlers translate these into HTTP responses."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Required input is missing."""

    status_code = 400


class ConflictError(AppError):
    """A unique value (email) is already taken."""

    status_code = 400


class AuthError(AppError):
    """Bad credentials (401) or a rejected token (403)."""

    status_code = 401


class NotFoundError(AppError):
    status_code = 404
