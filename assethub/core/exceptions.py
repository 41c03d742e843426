from fastapi import HTTPException


class BadRequestError(HTTPException):
    def __init__(self, detail: str = "Bad request", headers: dict[str, str] | None = None):
        super().__init__(status_code=400, detail=detail, headers=headers)


class InvalidRequestError(BadRequestError):
    """A request whose identity contradicts the operation (e.g. create with an id)."""


class InvalidArgumentError(BadRequestError):
    """A store call with arguments outside its contract."""


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ServiceUnavailableError(HTTPException):
    def __init__(self, detail: str = "Service unavailable"):
        super().__init__(status_code=503, detail=detail)


class JobFetchError(HTTPException):
    """The job definition could not be retrieved from storage."""

    def __init__(self, detail: str = "Job definition could not be fetched"):
        super().__init__(status_code=502, detail=detail)


class JobExecutionError(HTTPException):
    """The external runner failed, exited non-zero, or timed out."""

    def __init__(self, message: str, cause: str):
        self.message = message
        self.cause = cause
        super().__init__(status_code=500, detail={"message": message, "cause": cause})


class JobTimeoutError(JobExecutionError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Job did not finish within {timeout:g}s", cause="timeout")
