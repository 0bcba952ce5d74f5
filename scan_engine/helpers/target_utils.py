from urllib.parse import urlparse

FAVICON_SUFFIX = "favicon.ico"


def normalize_favicon_url(target):
    if target.endswith(FAVICON_SUFFIX):
        return target
    return f"{target}/{FAVICON_SUFFIX}"


def download_filename(url):
    """
    Builds the local filename used when saving a downloaded favicon.

    Args:
        url (str): The URL the favicon was requested from.

    Returns:
        str: "<host>.favicon.ico", where host keeps any explicit port.

    Raises:
        ValueError: If the URL cannot be parsed.
    """
    parsed = urlparse(url)
    # .port raises ValueError for a non-numeric or out-of-range port
    parsed.port
    host = parsed.netloc.rpartition("@")[2]
    return f"{host}.{FAVICON_SUFFIX}"


def validate_proxy(proxy):
    """Checks a SOCKS5 proxy address of the form host:port."""
    if not proxy:
        raise ValueError("Proxy address cannot be empty.")

    if "://" in proxy:
        raise ValueError(f"Proxy must be given as host:port, got: {proxy}")

    host, sep, port = proxy.rpartition(":")
    if not sep or not host:
        raise ValueError(f"Proxy is missing a port: {proxy}")

    if host.startswith("[") and host.endswith("]"): # IPv6 literal
        host = host.strip("[]")
    if not host:
        raise ValueError(f"Invalid proxy host: {proxy}")

    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"Invalid proxy port: {port}")

    # socks5h hands the hostname to the proxy for resolution
    return f"socks5h://{proxy}"
