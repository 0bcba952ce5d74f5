import base64
import itertools

import pytest
from core.presenter import (
    OutputMode,
    fofa_link,
    render_report,
    select_output_mode,
    shodan_link,
)

FP = "708578229"
FOFA_Q = base64.b64encode(b"icon_hash=708578229").decode()


class TestSelectOutputMode:
    """Every silent/fofa/shodan combination maps to exactly one mode."""

    @pytest.mark.parametrize("silent,fofa,shodan,expected", [
        (True, False, False, OutputMode.PLAIN_SILENT),
        (True, True, False, OutputMode.FOFA_SILENT),
        (True, False, True, OutputMode.SHODAN_SILENT),
        (True, True, True, OutputMode.FOFA_SILENT),
        (False, False, False, OutputMode.BOTH_VERBOSE),
        (False, True, False, OutputMode.FOFA_VERBOSE),
        (False, False, True, OutputMode.SHODAN_VERBOSE),
        (False, True, True, OutputMode.FOFA_VERBOSE),
    ])
    def test_mode_table(self, silent, fofa, shodan, expected):
        assert select_output_mode(silent, fofa, shodan) is expected

    def test_all_modes_reachable(self):
        modes = {select_output_mode(*flags) for flags in itertools.product([True, False], repeat=3)}
        assert modes == set(OutputMode)


def test_links():
    assert fofa_link(FP) == f"https://fofa.info/result?qbase64={FOFA_Q}"
    assert shodan_link(FP) == "https://www.shodan.io/search?query=http.favicon.hash%3A708578229"


def test_silent_reports():
    assert render_report(FP, OutputMode.FOFA_SILENT) == "icon_hash=708578229\n"
    assert render_report(FP, OutputMode.SHODAN_SILENT) == "http.favicon.hash:708578229\n"
    assert render_report(FP, OutputMode.PLAIN_SILENT) == "708578229\n"


def test_negative_fingerprint_is_rendered_verbatim():
    assert render_report("-1277814690", OutputMode.SHODAN_SILENT) == "http.favicon.hash:-1277814690\n"


def test_fofa_verbose_report_quotes_hash():
    assert render_report(FP, OutputMode.FOFA_VERBOSE) == (
        "FOFA:\n"
        '  icon_hash="708578229"\n'
        f"  link: https://fofa.info/result?qbase64={FOFA_Q}\n"
    )


def test_shodan_verbose_report():
    assert render_report(FP, OutputMode.SHODAN_VERBOSE) == (
        "Shodan:\n"
        "  http.favicon.hash:708578229\n"
        "  link: https://www.shodan.io/search?query=http.favicon.hash%3A708578229\n"
    )


def test_default_report_contains_both_blocks_in_order():
    report = render_report(FP, OutputMode.BOTH_VERBOSE)
    assert report == (
        "FOFA:\n"
        "  icon_hash=708578229\n"
        f"  link: https://fofa.info/result?qbase64={FOFA_Q}\n"
        "Shodan:\n"
        "  http.favicon.hash:708578229\n"
        "  link: https://www.shodan.io/search?query=http.favicon.hash%3A708578229\n"
    )
    assert report.index("FOFA:") < report.index("Shodan:")


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        render_report(FP, "verbose")
