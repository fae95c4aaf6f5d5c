"""Custom exception classes for the Brimis workflow service."""


class BrimisError(Exception):
    """Base exception for Brimis."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class RequestValidationError(BrimisError):
    """Malformed request payload."""

    def __init__(self, message: str, details=None):
        super().__init__("REQUEST_VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(BrimisError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class ValidationFailedError(BrimisError):
    """One or more step gates are not satisfied."""

    def __init__(self, reasons: list[str]):
        self.reasons = list(reasons)
        super().__init__(
            "VALIDATION_FAILED",
            ". ".join(self.reasons),
            details={"reasons": self.reasons},
            status_code=422,
        )


class TerminalStateError(BrimisError):
    """Job is already at the final step."""

    def __init__(self, message: str = "Job is already at the final step"):
        super().__init__("TERMINAL_STATE", message, status_code=409)


class ConcurrencyConflictError(BrimisError):
    """Another writer moved the job before this transition could be applied."""

    def __init__(self, job_id: str, expected_step: str):
        self.job_id = job_id
        self.expected_step = expected_step
        super().__init__(
            "CONCURRENCY_CONFLICT",
            f"Job '{job_id}' is no longer at {expected_step}; re-fetch and retry",
            details={"job_id": job_id, "expected_step": expected_step},
            status_code=409,
        )


class StorageError(BrimisError):
    """Underlying storage call failed."""

    def __init__(self, message: str):
        super().__init__("STORAGE_FAILURE", message, status_code=503)
