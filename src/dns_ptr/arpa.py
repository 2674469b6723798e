"""Decoding of in-addr.arpa / ip6.arpa reverse names into IP addresses."""
from __future__ import annotations

import ipaddress
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

IPV4_SUFFIX = "in-addr.arpa"
IPV6_SUFFIX = "ip6.arpa"

_HEX_DIGITS = frozenset("0123456789abcdef")


def _normalize(qname: str) -> str:
    s = qname.strip().lower()
    if s.endswith("."):
        s = s[:-1]
    return s


def _labels(name: str, suffix: str) -> Optional[list[str]]:
    """Return the labels in front of ``.suffix``, or None if there are none."""
    head = name[: -len(suffix)]
    if not head.endswith("."):
        return None
    return head[:-1].split(".")


def _decode_v4(name: str) -> Optional[ipaddress.IPv4Address]:
    octets = _labels(name, IPV4_SUFFIX)
    if octets is None or len(octets) != 4:
        return None
    try:
        return ipaddress.IPv4Address(".".join(reversed(octets)))
    except ValueError:
        return None


def _decode_v6(name: str) -> Optional[ipaddress.IPv6Address]:
    nibbles = _labels(name, IPV6_SUFFIX)
    if nibbles is None or not 1 <= len(nibbles) <= 32:
        return None
    for nibble in nibbles:
        if len(nibble) != 1 or nibble not in _HEX_DIGITS:
            return None

    # Partial names are accepted: the missing low-order nibbles are zero,
    # so "8.b.d.0.1.0.0.2.ip6.arpa" decodes to 2001:db8::.
    digits = "".join(reversed(nibbles)).ljust(32, "0")
    return ipaddress.IPv6Address(bytes.fromhex(digits))


def decode(qname: str) -> Optional[IPAddress]:
    """Decode a reverse-lookup name into the address it encodes.

    Args:
        qname: Query name such as ``"5.0.0.10.in-addr.arpa."``. Surrounding
            whitespace, letter case and one trailing dot are ignored.

    Returns:
        The decoded ``IPv4Address`` or ``IPv6Address``, or None when the name
        is not a well-formed in-addr.arpa / ip6.arpa name.
    """
    name = _normalize(qname)
    if name.endswith(IPV4_SUFFIX):
        return _decode_v4(name)
    if name.endswith(IPV6_SUFFIX):
        return _decode_v6(name)
    return None


def canonical(address: IPAddress) -> str:
    """Render an address the way host table entries are written.

    IPv4-mapped IPv6 addresses render as their dotted IPv4 form.
    """
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return str(address.ipv4_mapped)
    return str(address)
