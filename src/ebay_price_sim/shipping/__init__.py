class ShipAndCoApiError(Exception):
    """Raised when a Ship&Co rates call fails."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class ShipAndCoConfigError(ShipAndCoApiError):
    """Raised before any network I/O when the access token is missing."""
