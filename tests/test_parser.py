"""Tests for the traffic log line parser."""

import pytest

from traffic_monitor.models import LogEvent
from traffic_monitor.parser import GRAMMARS, parse_line

from conftest import LEGACY_LINE, NAMED_LINE


class TestParseLineNamedFormat:
    def test_all_fields(self):
        event = parse_line(NAMED_LINE)
        assert isinstance(event, LogEvent)
        assert event.timestamp == "2025-12-11 23:31:42"
        assert event.client_ip == "192.168.1.201"
        assert event.client_name == "Redmi-13C"
        assert event.host == "graph.facebook.com"
        assert event.domain == "graph.facebook.com"
        assert event.remote_ip == "157.240.12.13"
        assert event.source == "TLS"
        assert event.raw == NAMED_LINE

    def test_client_name_with_spaces_is_trimmed(self):
        line = "[+] 2025-12-11 23:31:42 | 10.0.0.5 ( Living Room TV ) → a.b.c (8.8.8.8)"
        event = parse_line(line)
        assert event.client_name == "Living Room TV"

    def test_source_is_optional(self):
        line = "[+] 2025-12-11 23:31:42 | 10.0.0.5 (laptop) → example.org (93.184.216.34)"
        event = parse_line(line)
        assert event is not None
        assert event.source == ""
        assert event.remote_ip == "93.184.216.34"

    def test_ipv6_addresses(self):
        line = (
            "[+] 2025-12-11 23:31:42 | fe80::1c2d:3e4f (phone) → ipv6.example.net "
            "(2606:4700:4700::1111) | fonte=DNS"
        )
        event = parse_line(line)
        assert event.client_ip == "fe80::1c2d:3e4f"
        assert event.remote_ip == "2606:4700:4700::1111"

    def test_source_with_dash_and_underscore(self):
        line = "[+] 2025-12-11 23:31:42 | 10.0.0.5 (pc) → x.com (1.1.1.1) | fonte=DNS_delayed-2"
        assert parse_line(line).source == "DNS_delayed-2"

    def test_trailing_newline_stripped(self):
        event = parse_line(NAMED_LINE + "\n")
        assert event is not None
        assert event.raw == NAMED_LINE


class TestParseLineLegacyFormat:
    def test_line_without_client_name(self):
        event = parse_line(LEGACY_LINE)
        assert event is not None
        assert event.timestamp == "2025-12-01 19:29:20"
        assert event.client_ip == "192.168.3.11"
        assert event.client_name == ""
        assert event.domain == "exemplo.com"
        assert event.remote_ip == "1.2.3.4"
        assert event.source == "DNS"

    def test_named_grammar_tried_first(self):
        assert GRAMMARS[0].match(NAMED_LINE)
        assert GRAMMARS[0].match(LEGACY_LINE) is None
        assert GRAMMARS[1].match(LEGACY_LINE)


class TestParseLineRejected:
    @pytest.mark.parametrize("line", [
        "",
        "garbage line",
        "[+] no pipe here",
        "[-] 2025-12-01 19:29:20 | 192.168.3.11 → exemplo.com (1.2.3.4)",
        "[+] 2025-12-01 19:29:20 | not-an-ip → exemplo.com (1.2.3.4)",
        "[+] 2025-12-01 19:29:20 | 192.168.3.11 → exemplo.com",
        "[+] 2025-12-01 19:29:20 | 192.168.3.11 → exemplo.com (remote)",
    ])
    def test_malformed_lines_return_none(self, line):
        assert parse_line(line) is None


class TestLogEventToDict:
    def test_domain_included(self):
        data = parse_line(NAMED_LINE).to_dict()
        assert data == {
            "timestamp": "2025-12-11 23:31:42",
            "client_ip": "192.168.1.201",
            "client_name": "Redmi-13C",
            "host": "graph.facebook.com",
            "domain": "graph.facebook.com",
            "remote_ip": "157.240.12.13",
            "source": "TLS",
            "raw": NAMED_LINE,
        }

    def test_frozen(self):
        event = parse_line(NAMED_LINE)
        with pytest.raises(AttributeError):
            event.host = "other"
