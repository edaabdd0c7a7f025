"""
Unit tests for Accept-Encoding negotiation.
"""
import pytest

from squash.compression import Encoding, negotiate_encoding
from squash.compression.negotiation import parse_accept_encoding


@pytest.mark.parametrize("header, expected", [
    (None, Encoding.IDENTITY),
    ("", Encoding.IDENTITY),
    ("gzip", Encoding.GZIP),
    ("deflate", Encoding.DEFLATE),
    ("GZip", Encoding.GZIP),
    ("gzip, deflate, br", Encoding.GZIP),
    ("deflate, gzip", Encoding.DEFLATE),
    ("gzip;q=0.5, deflate", Encoding.DEFLATE),
    ("gzip;q=0, deflate;q=0", Encoding.IDENTITY),
    ("br, identity", Encoding.IDENTITY),
    ("*", Encoding.GZIP),
    ("gzip;q=0, *", Encoding.DEFLATE),
    ("*;q=0.1, deflate;q=0.1", Encoding.DEFLATE),
    ("gzip;q=bogus, deflate;q=0.2", Encoding.DEFLATE),
])
def test_negotiate_encoding(header, expected):
    assert negotiate_encoding(header) is expected


def test_offered_order_breaks_ties():
    assert negotiate_encoding("*", offered=(Encoding.DEFLATE, Encoding.GZIP)) is Encoding.DEFLATE


def test_parse_accept_encoding():
    assert parse_accept_encoding("gzip;q=0.8, , Deflate ; q=1") == [
        ("gzip", 0.8),
        ("deflate", 1.0),
    ]
