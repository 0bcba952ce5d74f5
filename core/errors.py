class IFaviconError(Exception):
    """Base class for failures that end a run with exit code 1."""


class FetchError(IFaviconError):
    """Network, file, URL-parse or write failure while handling favicon content."""


class ProxySetupError(IFaviconError):
    """The SOCKS5 proxy could not be configured or reached."""
