"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SarNotFoundError(ApplicationError):
    """Raised when update/delete/submit/file targets a SAR id that does not exist."""

    def __init__(self, sar_id: str) -> None:
        self.sar_id = sar_id
        super().__init__(f"SAR with ID {sar_id} not found")


class StoreUnavailableError(ApplicationError):
    """Raised by store adapters when the backing store fails or times out. Never retried here."""
