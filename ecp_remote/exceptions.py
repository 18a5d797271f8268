"""Exceptions raised by the ecp_remote package."""


class ECPRemoteError(Exception):
    """Base class for all ecp_remote errors."""
    pass


class DiscoveryError(ECPRemoteError):
    """The discovery socket could not be created or bound."""
    pass


class DeviceRequestError(ECPRemoteError):
    """A control or query request failed while running in strict mode."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
