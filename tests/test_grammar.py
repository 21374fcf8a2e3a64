"""
Unit tests for the for= token grammar.
"""

from typing import List, Tuple

import pytest

from forwarded._grammar import (
    FOR_GRAMMAR,
    Capture,
    bare_name,
    bare_ipv4,
    quoted_name,
    quoted_ipv4,
    quoted_ipv6,
)


def scan(text: str) -> List[Tuple[str, str]]:
    return [(capture.kind, capture.value) for capture in FOR_GRAMMAR.scan(text)]


class TestSubMatchers:
    def test_quoted_ipv6(self):
        assert quoted_ipv6('"[2001:db8:cafe::17]"', 0) == ("2001:db8:cafe::17", 21)
        assert quoted_ipv6('"[2001:DB8:CAFE::17]:4711"', 0) == ("2001:DB8:CAFE::17", 26)
        assert quoted_ipv6('"[]"', 0) is None
        assert quoted_ipv6('"[2001:db8:cafe::17]:"', 0) is None
        assert quoted_ipv6('"[2001:db8:frse::17]"', 0) is None
        assert quoted_ipv6("[2001:db8:cafe::17]", 0) is None

    def test_quoted_ipv4(self):
        assert quoted_ipv4('"192.0.2.60"', 0) == ("192.0.2.60", 12)
        assert quoted_ipv4('"192.0.2.60:5412"', 0) == ("192.0.2.60", 17)
        assert quoted_ipv4('"1920.0.2.60"', 0) is None
        assert quoted_ipv4('"192.0.2"', 0) is None
        assert quoted_ipv4('"192.0.2.60:"', 0) is None

    def test_quoted_name(self):
        assert quoted_name('"Hostname"', 0) == ("Hostname", 10)
        assert quoted_name('""', 0) == ("", 2)
        assert quoted_name('"a,b; c=d"', 0) == ("a,b; c=d", 10)
        assert quoted_name('"host:80"', 0) is None
        assert quoted_name('"unterminated', 0) is None

    def test_bare_ipv4(self):
        assert bare_ipv4("192.0.2.60", 0) == ("192.0.2.60", 10)
        # Only the shape is checked, ranges are validated as an IP literal later
        assert bare_ipv4("999.999.999.999", 0) == ("999.999.999.999", 15)
        assert bare_ipv4("192.0.2", 0) is None
        assert bare_ipv4("192..2.60", 0) is None

    def test_bare_name(self):
        assert bare_name("_OBFNAME", 0) == ("_OBFNAME", 8)
        assert bare_name("example.com", 0) == ("example", 7)
        assert bare_name('"quoted"', 0) is None

    def test_matchers_start_at_the_cursor(self):
        assert bare_name("for=abc", 4) == ("abc", 7)
        assert quoted_ipv4('for="192.0.2.60"', 4) == ("192.0.2.60", 16)


class TestScan:
    def test_single_step(self):
        assert list(FOR_GRAMMAR.scan("for=192.0.2.60")) == [Capture("ipv4", "192.0.2.60", 0, 14)]

    def test_terminator_is_consumed(self):
        assert list(FOR_GRAMMAR.scan("for=a;by=b")) == [Capture("name", "a", 0, 6)]

    @pytest.mark.parametrize("key", ["for=", "For=", "FOR=", "fOR="])
    def test_key_is_case_insensitive(self, key: str):
        assert scan(f"{key}Hostname") == [("name", "Hostname")]

    def test_alternative_order(self):
        assert scan('for="[2001:db8:cafe::17]:4711"') == [("ipv6", "2001:db8:cafe::17")]
        assert scan('for="192.0.2.60:5412"') == [("ipv4", "192.0.2.60")]
        assert scan('for="_gazonk"') == [("name", "_gazonk")]
        assert scan("for=192.0.2.60") == [("ipv4", "192.0.2.60")]
        assert scan("for=_gazonk") == [("name", "_gazonk")]

    def test_quoted_shape_that_is_not_an_address_is_a_name(self):
        assert scan('for="192.0.2"') == [("name", "192.0.2")]

    def test_multiple_steps(self):
        assert scan("for=192.0.2.43, for=198.51.100.17;by=203.0.113.60;proto=http") == [
            ("ipv4", "192.0.2.43"),
            ("ipv4", "198.51.100.17"),
        ]

    def test_other_parameters_are_skipped(self):
        assert scan("by=203.0.113.60;proto=http;for=_hidden;host=example.com") == [
            ("name", "_hidden")
        ]

    @pytest.mark.parametrize(
        "header",
        [
            "for=192.0.2.60.33",
            "for=192.0.2",
            "for=192.0.2.60:1234",
            "for=[2001:db8:cafe::17]",
            "for=[2001:db8:cafe::17]:1234",
            'for="[2001:db8:frse::17]:1234"',
            "for=example.com",
            "for=Hostname ",
            "for=",
            'for="',
            "",
            "proto=https",
        ],
    )
    def test_no_match(self, header: str):
        assert scan(header) == []

    def test_scan_resumes_after_a_failed_step(self):
        assert scan("for=example.com, for=_real") == [("name", "_real")]

    def test_non_ascii_text_keeps_positions_aligned(self):
        # "İ".lower() is two characters long
        assert scan("İİİ;for=abc") == [("name", "abc")]

    def test_long_adversarial_input(self):
        # Only the last step, "for=" quoted and followed by the end of text, is complete
        assert scan('for="' * 20000) == [("name", "for=")]
        assert scan('for="' * 20000 + "x") == []
        assert scan("for=1." * 20000) == []
        assert len(scan("for=a," * 20000)) == 20000
