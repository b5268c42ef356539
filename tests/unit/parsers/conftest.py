"""Shared fixtures for parser unit tests.

Provides sample CEF and LEEF lines, with and without syslog preambles.
"""

import pytest


@pytest.fixture
def syslog_cef_line() -> str:
    """CEF line behind an RFC 5424 style syslog preamble."""
    return (
        "<134>2022-02-14T03:17:30-08:00 TEST "
        "CEF:0|Vendor|Product|20.0.560|600|User Signed In|3|src=127.0.0.1 suser=Admin"
    )


@pytest.fixture
def plain_cef_line() -> str:
    """CEF line without a syslog preamble."""
    return (
        "CEF:0|Security|threatmanager|1.0|100|worm successfully stopped|10|"
        "src=10.0.0.1 dst=2.1.2.2 spt=1232"
    )


@pytest.fixture
def cef_message_line() -> str:
    """CEF line whose msg value contains spaces."""
    return (
        "CEF:0|Vendor|Product|1.0|600|User Signed In|3|"
        "msg=User signed in from 127.0.0.1 suser=Admin act=login"
    )


@pytest.fixture
def leef1_line() -> str:
    """LEEF 1.0 line with tab-delimited attributes."""
    return (
        "LEEF:1.0|Microsoft|MSExchange|4.0 SP1|15345|"
        "src=192.0.2.0\tdst=172.50.123.1\tsev=5\tcat=anomaly\tmsg=there are spaces in this message"
    )


@pytest.fixture
def leef2_caret_line() -> str:
    """LEEF 2.0 line declaring a caret delimiter."""
    return (
        "LEEF:2.0|Lancope|StealthWatch|1.0|41|^|"
        "src=10.0.1.8^dst=10.0.0.5^sev=5^srcPort=81^dstPort=21"
    )


@pytest.fixture
def leef2_hex_line() -> str:
    """LEEF 2.0 line declaring its delimiter as a hex code."""
    return (
        "<134>Feb 14 19:04:54 gateway.example.com "
        "LEEF:2.0|Microsoft|MSExchange|2013|Logon Failure|x5e|usrName=bob^src=10.1.1.1"
    )


@pytest.fixture
def cef_labeled_line() -> str:
    """CEF line using custom string fields with labels."""
    return (
        "CEF:0|Vendor|Product|1.0|600|User Signed In|3|"
        "cs1=Primary cs1Label=Tenant Name src=127.0.0.1 cn1=42 cn1Label=Risk"
    )
