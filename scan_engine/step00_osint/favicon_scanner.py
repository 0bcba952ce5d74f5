import logging
import time

import requests
import socks
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from core.errors import FetchError, ProxySetupError
from scan_engine.helpers.encoding import favicon_hash
from scan_engine.helpers.target_utils import download_filename, validate_proxy

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
)
DIRECT_TIMEOUT = 10
CHUNK_SIZE = 8192


def _is_proxy_failure(exc):
    """True when the error chain shows the SOCKS proxy itself could not be reached."""
    pending = [exc]
    seen = set()
    while pending:
        err = pending.pop()
        if not isinstance(err, BaseException) or id(err) in seen:
            continue
        seen.add(id(err))
        if isinstance(err, (requests.exceptions.ProxyError, socks.ProxyConnectionError)):
            return True
        # requests wraps urllib3 errors in args, urllib3 keeps its cause in .reason
        pending.extend([err.__cause__, err.__context__, getattr(err, "reason", None)])
        pending.extend(arg for arg in err.args if isinstance(arg, BaseException))
    return False


class FaviconScanner:
    def __init__(self, proxy=None):
        self.proxies = None
        if proxy:
            try:
                proxy_url = validate_proxy(proxy)
            except ValueError as e:
                raise ProxySetupError(f"can't connect to the proxy: {e}") from e
            self.proxies = {"http": proxy_url, "https": proxy_url}

    def _request_kwargs(self):
        if self.proxies:
            # Proxied requests have no client timeout and keep certificate checks
            return {"proxies": self.proxies}
        urllib3.disable_warnings(InsecureRequestWarning)
        return {"timeout": DIRECT_TIMEOUT, "verify": False}

    def fetch_from_url(self, url):
        """
        Downloads the favicon body with a single GET.

        Non-2xx responses are not treated as failures, the body is returned as-is.
        """
        headers = {"User-Agent": USER_AGENT}
        kwargs = self._request_kwargs()
        logger.info("Fetching favicon from %s%s", url, " via proxy" if self.proxies else "")
        started = time.monotonic()
        try:
            response = requests.get(url, headers=headers, stream=True, **kwargs)
            try:
                content = self._read_body(response, started)
            finally:
                response.close()
        except requests.exceptions.SSLError as e:
            raise FetchError(str(e)) from e
        except requests.exceptions.InvalidSchema as e:
            # With a proxy set, InvalidSchema means SOCKS support is not installed
            if self.proxies:
                raise ProxySetupError(f"can't connect to the proxy: {e}") from e
            raise FetchError(str(e)) from e
        except requests.exceptions.ConnectionError as e:
            if self.proxies and _is_proxy_failure(e):
                raise ProxySetupError(f"can't connect to the proxy: {e}") from e
            raise FetchError(str(e)) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(str(e)) from e
        logger.debug("HTTP %s, %d bytes", response.status_code, len(content))
        return content

    def _read_body(self, response, started):
        # requests' timeout bounds each socket operation; direct fetches also get a total deadline
        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            chunks.append(chunk)
            if not self.proxies and time.monotonic() - started > DIRECT_TIMEOUT:
                raise FetchError(f"Client timeout exceeded while reading body ({DIRECT_TIMEOUT}s)")
        return b"".join(chunks)

    def read_from_file(self, path):
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise FetchError(str(e)) from e
        logger.debug("Read %d bytes from %s", len(content), path)
        return content

    def save_download(self, url, content):
        try:
            filename = download_filename(url)
        except ValueError as e:
            raise FetchError(str(e)) from e
        try:
            with open(filename, "wb") as f:
                f.write(content)
        except OSError as e:
            raise FetchError(str(e)) from e
        logger.info("Saved favicon to %s", filename)
        return filename

    def calculate_hash(self, content):
        return favicon_hash(content)
