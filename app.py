import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from core.config import Config
from core.errors import IFaviconError, ProxySetupError
from core.presenter import render_report, select_output_mode
from scan_engine.helpers.target_utils import normalize_favicon_url
from scan_engine.step00_osint.favicon_scanner import FaviconScanner

logger = logging.getLogger(__name__)

EXAMPLES = (
    "Example:\n"
    "  ifavicon -url https://example.com/favicon.ico\n"
    "  ifavicon -download -url https://example.com/favicon.ico\n"
    "  ifavicon -file example.com.favicon.ico\n"
)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ifavicon",
        description="Calculate the favicon hash used by FOFA and Shodan searches.",
    )
    parser.add_argument("-file", default="", help="Get favicon hash from target file")
    parser.add_argument("-url", default="", help="Get favicon hash from target URL")
    parser.add_argument("-download", action="store_true", help="Download favicon from URL")
    parser.add_argument("-silent", action="store_true", help="Silent Mode")
    parser.add_argument("-proxy", default="", help="Route the request through a SOCKS5 proxy (host:port)")
    parser.add_argument("-fofa", action="store_true", help="Output only fofa results")
    parser.add_argument("-shodan", action="store_true", help="Output only shodan results")
    return parser


def configure_logging():
    level_name = os.getenv("IFAVICON_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def compute_hash(config):
    """Fetch or read the favicon described by config and return its hash."""
    if config.url:
        url = normalize_favicon_url(config.url)
        scanner = FaviconScanner(proxy=config.proxy)
        content = scanner.fetch_from_url(url)
        if config.download:
            scanner.save_download(url, content)
    else:
        scanner = FaviconScanner()
        content = scanner.read_from_file(config.file)
    return scanner.calculate_hash(content)


def main(argv=None):
    load_dotenv()
    configure_logging()

    parser = build_parser()
    config = Config.from_args(parser.parse_args(argv))

    if config.is_empty:
        parser.print_help()
        print(EXAMPLES, end="")
        return 0

    try:
        fingerprint = compute_hash(config)
    except ProxySetupError as e:
        print(e, file=sys.stderr)
        return 1
    except IFaviconError as e:
        print(e)
        return 1

    mode = select_output_mode(config.silent, config.fofa, config.shodan)
    sys.stdout.write(render_report(fingerprint, mode))
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
