"""Asyncio UDP protocol answering PTR and host lookups."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from dnslib import OPCODE, DNSHeader, DNSRecord, QTYPE, RCODE
from dnslib.dns import DNSError

from .config import Config

logger = logging.getLogger(__name__)


class HostTableProtocol(asyncio.DatagramProtocol):
    """DNS handler over UDP backed by the host table.

    Attributes:
        transport: Active UDP transport or None until connected.
        config: Shared configuration and host table.
    """

    def __init__(self, config: Config) -> None:
        """Initialize the protocol.

        Args:
            config: Loaded host table configuration.
        """
        self.transport: asyncio.DatagramTransport | None = None
        self.config = config

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        """Called by asyncio when the UDP socket is ready.

        Args:
            transport: Created datagram transport.
        """
        self.transport = transport  # type: ignore[assignment]
        sock = self.transport.get_extra_info("socket")
        logger.info("UDP listening on %s", sock.getsockname() if sock else "?")

    def datagram_received(self, data: bytes, addr: Any) -> None:
        """Process a single DNS datagram.

        Args:
            data: Raw DNS message bytes.
            addr: Client address tuple as provided by asyncio.

        Returns:
            None
        """
        logger.debug("received %d bytes from %s", len(data), addr)
        self.config.maybe_reload()

        try:
            request = DNSRecord.parse(data)
        except DNSError:
            logger.debug("failed to parse request from %s", addr)
            return

        if request.header.qr:
            logger.debug("ignoring response packet from %s", addr)
            return

        reply = DNSRecord(DNSHeader(id=request.header.id, qr=1, aa=1, ra=0), q=request.q)
        if request.header.opcode != OPCODE.QUERY:
            reply.header.rcode = RCODE.NOTIMP
            self._send(reply, addr)
            return

        qname = request.q.qname
        qtype = request.q.qtype
        logger.debug("%s query: %s %s", addr, qname, QTYPE.get(qtype))

        answers = self.config.lookup(qname, qtype)
        if answers:
            reply.add_answer(*answers)
        else:
            reply.header.rcode = RCODE.NXDOMAIN

        self._send(reply, addr)

    def _send(self, reply: DNSRecord, addr: Any) -> None:
        if self.transport:
            try:
                self.transport.sendto(reply.pack(), addr)
            except (OSError, RuntimeError) as exc:
                logger.warning("failed to send response to %s: %s", addr, exc)
