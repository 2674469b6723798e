"""PTR answers synthesized from the forward host table."""
from __future__ import annotations

import logging
from typing import Mapping, MutableSequence, Optional

from dnslib import CLASS, PTR, QTYPE, RR, DNSLabel

from .arpa import canonical, decode
from .records import DEFAULT_ZONE, PTR_TTL, HostTable, RecordKind

logger = logging.getLogger(__name__)


def effective_zone(zone: Optional[str]) -> str:
    """Return the zone used to qualify short hostnames.

    Args:
        zone: Configured zone; empty or None selects ``"local."``.

    Returns:
        Zone name ending with a dot.
    """
    zone = zone or DEFAULT_ZONE
    if not zone.endswith("."):
        zone += "."
    return zone


def resolve_ptr(
    qname: str,
    zone: Optional[str],
    hosts: HostTable,
    answers: MutableSequence[RR],
) -> int:
    """Append a PTR record for every host whose address matches ``qname``.

    Addresses are compared as strings against the canonical rendering of the
    decoded address. Hosts are visited in table order; within a host, A
    addresses come before AAAA addresses.

    Args:
        qname: Reverse-lookup query name, echoed unchanged as the record owner.
        zone: Zone appended to matching short hostnames.
        hosts: Host table; only read.
        answers: Answer list the records are appended to.

    Returns:
        Number of records appended. Zero when ``qname`` is not a reverse name.
    """
    address = decode(qname)
    if address is None:
        logger.debug("not a reverse name: %s", qname)
        return 0

    key = canonical(address)
    zone = effective_zone(zone)
    added = 0
    for host, rrmap in hosts.items():
        if not isinstance(rrmap, Mapping):
            continue
        for kind in RecordKind:
            addrs = rrmap.get(kind)
            if not isinstance(addrs, (list, tuple)):
                continue
            for addr in addrs:
                if addr != key:
                    continue
                answers.append(
                    RR(
                        DNSLabel(qname),
                        QTYPE.PTR,
                        CLASS.IN,
                        ttl=PTR_TTL,
                        rdata=PTR(DNSLabel(f"{host}.{zone}")),
                    )
                )
                added += 1

    logger.debug("PTR %s (%s): %d answers", qname, key, added)
    return added
