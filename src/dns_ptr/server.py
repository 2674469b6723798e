"""Server entry point and lifecycle management."""
from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from typing import NoReturn

from .config import Config
from .protocol import HostTableProtocol
from .resolver import effective_zone

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_level: str) -> None:
    """Configure root logging; unknown level names fall back to INFO."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def bind_family(host: str) -> int:
    """Return the socket family matching a literal bind address.

    Hostnames that are not IP literals are bound over IPv4.
    """
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return socket.AF_INET
    return socket.AF_INET6 if address.version == 6 else socket.AF_INET


async def start(config: Config, host: str, port: int) -> asyncio.DatagramTransport:
    """Bind the UDP endpoint answering from ``config``.

    Args:
        config: Loaded host table configuration.
        host: IP address to bind to.
        port: UDP port; 0 picks a free port.

    Returns:
        The bound datagram transport.

    Raises:
        OSError: If the socket cannot be bound.
    """
    loop = asyncio.get_running_loop()
    transport, _ = await loop.create_datagram_endpoint(
        lambda: HostTableProtocol(config),
        local_addr=(host, port),
        family=bind_family(host),
    )
    logger.info(
        "serving %d hosts in zone %s on %s",
        len(config.hosts),
        effective_zone(config.zone),
        transport.get_extra_info("sockname"),
    )
    return transport


async def serve(config_path: str, host: str, port: int, log_level: str = "INFO") -> NoReturn:
    """Run the UDP DNS server for the host table until cancelled.

    Args:
        config_path (str): Path to the YAML configuration file.
        host (str): IP address to bind to.
        port (int): UDP port number to listen on.
        log_level (str, optional): Logging verbosity level. Defaults to "INFO".

    Raises:
        OSError: If the socket cannot be bound.
    """
    configure_logging(log_level)
    transport = await start(Config(config_path), host, port)
    try:
        await asyncio.Future()
    except asyncio.CancelledError:
        logger.info("server task cancelled")
    finally:
        logger.info("shutting down")
        transport.close()
