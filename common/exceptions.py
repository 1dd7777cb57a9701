"""Base exception shared by the controller and the client."""


class InstructScanError(Exception):
    """
    Base exception class for all InstructScan errors.
    """
    pass
