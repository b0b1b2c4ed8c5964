"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class BackendError(AdapterError):
    """Comment backend request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class BackendNotFoundError(BackendError):
    """Comment backend answered 404."""

    def __init__(self, resource: str):
        super().__init__(f"Backend resource not found: {resource}", status_code=404)
