import base64
from enum import Enum

FOFA_SEARCH_URL = "https://fofa.info/result?qbase64="
SHODAN_SEARCH_URL = "https://www.shodan.io/search?query=http.favicon.hash%3A"


class OutputMode(Enum):
    PLAIN_SILENT = "plain_silent"
    FOFA_SILENT = "fofa_silent"
    SHODAN_SILENT = "shodan_silent"
    FOFA_VERBOSE = "fofa_verbose"
    SHODAN_VERBOSE = "shodan_verbose"
    BOTH_VERBOSE = "both_verbose"


def select_output_mode(silent, fofa, shodan):
    # fofa is checked first, so it wins when both filters are set
    if silent:
        if fofa:
            return OutputMode.FOFA_SILENT
        if shodan:
            return OutputMode.SHODAN_SILENT
        return OutputMode.PLAIN_SILENT
    if fofa:
        return OutputMode.FOFA_VERBOSE
    if shodan:
        return OutputMode.SHODAN_VERBOSE
    return OutputMode.BOTH_VERBOSE


def fofa_query(fingerprint):
    return f"icon_hash={fingerprint}"


def shodan_query(fingerprint):
    return f"http.favicon.hash:{fingerprint}"


def fofa_link(fingerprint):
    qbase64 = base64.b64encode(fofa_query(fingerprint).encode("utf-8")).decode("ascii")
    return FOFA_SEARCH_URL + qbase64


def shodan_link(fingerprint):
    return SHODAN_SEARCH_URL + fingerprint


def _fofa_block(fingerprint, quoted=False):
    query = f'icon_hash="{fingerprint}"' if quoted else fofa_query(fingerprint)
    return (
        "FOFA:\n"
        f"  {query}\n"
        f"  link: {fofa_link(fingerprint)}\n"
    )


def _shodan_block(fingerprint):
    return (
        "Shodan:\n"
        f"  {shodan_query(fingerprint)}\n"
        f"  link: {shodan_link(fingerprint)}\n"
    )


def render_report(fingerprint, mode):
    """
    Formats a favicon hash for the selected output mode.

    Silent modes emit a single line meant for piping into other tools, verbose
    modes emit labeled blocks with ready-to-open search links. The fofa-only
    block quotes the hash value, the combined report does not.
    """
    if mode is OutputMode.FOFA_SILENT:
        return fofa_query(fingerprint) + "\n"
    if mode is OutputMode.SHODAN_SILENT:
        return shodan_query(fingerprint) + "\n"
    if mode is OutputMode.PLAIN_SILENT:
        return f"{fingerprint}\n"
    if mode is OutputMode.FOFA_VERBOSE:
        return _fofa_block(fingerprint, quoted=True)
    if mode is OutputMode.SHODAN_VERBOSE:
        return _shodan_block(fingerprint)
    if mode is OutputMode.BOTH_VERBOSE:
        return _fofa_block(fingerprint) + _shodan_block(fingerprint)
    raise ValueError(f"Unknown output mode: {mode}")
