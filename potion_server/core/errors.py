# potion_server/core/errors.py


class ApiError(Exception):
    """
    Base class for errors that map directly onto an HTTP response.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(ApiError):
    status_code = 400

    def __init__(self, message: str = "Invalid input", errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or [{"field": None, "message": message}]

    def to_body(self) -> dict:
        return {"errors": self.errors}


class UnauthorizedError(ApiError):
    status_code = 401


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class PersistenceError(ApiError):
    status_code = 500
