class TicketScanError(Exception):
    """Scan request that cannot proceed.

    error is the short title shown to the operator, message the actionable detail.
    """

    def __init__(self, error: str, message: str) -> None:
        super().__init__(message)
        self.error = error
        self.message = message


class ScanBadRequestError(TicketScanError):
    pass


class ScanNotFoundError(TicketScanError):
    pass
