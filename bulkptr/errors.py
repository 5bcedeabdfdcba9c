"""
Exception types for BulkPTR
"""


class BulkPTRError(Exception):
    """Base class for all BulkPTR errors"""


class ConfigurationError(BulkPTRError, ValueError):
    """
    Invalid configuration or input.

    Raised before any resolution starts: empty nameserver list, malformed
    endpoint string, malformed address line, out-of-range option values.
    """


class TransportError(BulkPTRError):
    """
    A DNS query could not be completed.

    Connection failure, timeout or a malformed response. Raised by DNS
    clients and turned into an error outcome by the PTR resolver.
    """

    def __init__(self, message: str, nameserver=None):
        super().__init__(message)
        self.nameserver = nameserver
