
class NetworkError(RuntimeError):
    """Raised when the consultations API is unreachable or answers with a non-2xx status."""

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code
