import ipaddress

import pytest

from dns_ptr.arpa import canonical, decode


@pytest.mark.parametrize(
    "address",
    ["10.0.0.5", "0.0.0.0", "255.255.255.255", "192.168.1.20", "8.8.4.4"],
)
def test_ipv4_reverse_name(address):
    ip = ipaddress.IPv4Address(address)
    assert decode(ip.reverse_pointer + ".") == ip
    assert decode(ip.reverse_pointer) == ip


@pytest.mark.parametrize(
    "address",
    ["2001:db8::1", "::", "::1", "fd00::5", "fe80::1ff:fe23:4567:890a",
     "ffff:ffff:ffff:ffff:ffff:ffff:ffff:ffff"],
)
def test_ipv6_reverse_name(address):
    ip = ipaddress.IPv6Address(address)
    assert decode(ip.reverse_pointer + ".") == ip


def test_case_and_whitespace_are_ignored():
    assert decode("  5.0.0.10.IN-ADDR.ARPA.  ") == ipaddress.IPv4Address("10.0.0.5")
    upper = ipaddress.IPv6Address("2001:db8::abcd").reverse_pointer.upper()
    assert decode(upper) == ipaddress.IPv6Address("2001:db8::abcd")


def test_ipv4_result_is_four_bytes():
    assert decode("1.0.0.127.in-addr.arpa.").packed == b"\x7f\x00\x00\x01"


def test_partial_ipv6_name_is_zero_padded():
    addr = decode("8.b.d.0.1.0.0.2.ip6.arpa.")
    assert addr == ipaddress.IPv6Address("2001:db8::")
    assert decode("f.ip6.arpa") == ipaddress.IPv6Address("f000::")


@pytest.mark.parametrize(
    "qname",
    [
        "0.0.10.in-addr.arpa.",
        "5.5.0.0.10.in-addr.arpa.",
        "256.0.0.10.in-addr.arpa.",
        "a.0.0.10.in-addr.arpa.",
        "5..0.10.in-addr.arpa.",
        "05.0.0.10.in-addr.arpa.",
        "in-addr.arpa.",
        "5.0.0.10xin-addr.arpa.",
        "ip6.arpa.",
        ".ip6.arpa.",
        ".".join(["0"] * 33) + ".ip6.arpa.",
        "10.0.0.0.ip6.arpa.",
        "g.0.0.0.ip6.arpa.",
        "+.f.ip6.arpa.",
        "foo.bar.",
        "example.com",
        "",
        "   ",
        ".",
    ],
)
def test_malformed_names_are_rejected(qname):
    assert decode(qname) is None


def test_canonical_forms():
    assert canonical(ipaddress.IPv4Address("10.0.0.5")) == "10.0.0.5"
    assert canonical(ipaddress.IPv6Address("2001:0db8:0000:0000:0000:0000:0000:0001")) == "2001:db8::1"
    assert canonical(ipaddress.IPv6Address("::ffff:10.0.0.5")) == "10.0.0.5"
