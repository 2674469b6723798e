"""Configuration loading and host table lookups."""
from __future__ import annotations

import ipaddress
import logging
import os
from typing import Any

import yaml
from dnslib import AAAA, A, DNSLabel, QTYPE, RR

from .records import RecordKind
from .resolver import effective_zone, resolve_ptr

logger = logging.getLogger(__name__)

# Stable order for QTYPE.ANY responses.
FORWARD_ORDER: tuple[RecordKind, ...] = (RecordKind.A, RecordKind.AAAA)


def _parse_hosts(raw: Any) -> dict[str, dict[RecordKind, list[str]]]:
    """Validate the ``hosts`` section and build the host table.

    Args:
        raw: Value of the ``hosts`` key as returned by YAML.

    Returns:
        Host table in file order.

    Raises:
        ValueError: On a structurally invalid section.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("'hosts' must be a mapping")

    hosts: dict[str, dict[RecordKind, list[str]]] = {}
    for name, entry in raw.items():
        host = str(name).strip()
        if not host or host.endswith("."):
            raise ValueError(f"host {name!r}: short hostname required")
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ValueError(f"host {host!r}: mapping required, got {type(entry).__name__}")

        rrmap: dict[RecordKind, list[str]] = {}
        for key, values in entry.items():
            try:
                kind = RecordKind(str(key).upper().strip())
            except ValueError as exc:
                raise ValueError(f"host {host!r}: unsupported type '{key}'") from exc
            if values is None:
                values = []
            elif not isinstance(values, list):
                values = [values]
            rrmap[kind] = [str(v).strip() for v in values]
        hosts[host] = rrmap
    return hosts


class Config:
    """Parsed configuration holding the host table.

    Args:
        path: Filesystem path to the YAML configuration.

    Attributes:
        path: Path to the YAML config file.
        zone: Zone appended to short hostnames; may be empty.
        default_ttl: TTL applied to forward (A/AAAA) answers.
        hosts: Host table, replaced wholesale on every reload.
    """

    def __init__(self, path: str) -> None:
        """Initialize and load configuration.

        Args:
            path: Path to YAML file.
        """
        self.path = path
        self._mtime = 0.0
        self.zone = ""
        self.default_ttl = 300
        self.hosts: dict[str, dict[RecordKind, list[str]]] = {}
        self.load(force=True)

    def load(self, force: bool = False) -> None:
        """Load or reload YAML configuration.

        Args:
            force: Reload regardless of file mtime.

        Raises:
            ValueError: On invalid YAML structure or host data.
            FileNotFoundError: If the config is missing and `force=True`.
        """
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            if force:
                raise
            return

        if not force and st.st_mtime <= self._mtime:
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML parsing error: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("top level must be a mapping")

        try:
            default_ttl = int(data.get("default_ttl", 300))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid default_ttl: {exc}") from exc

        zone = data.get("zone") or ""
        if not isinstance(zone, str):
            raise ValueError(f"'zone' must be a string, got {type(zone).__name__}")

        hosts = _parse_hosts(data.get("hosts"))

        self.zone = zone.strip()
        self.default_ttl = default_ttl
        self.hosts = hosts
        self._mtime = st.st_mtime
        logger.info(
            "configuration loaded: %d hosts, zone %s", len(self.hosts), effective_zone(self.zone)
        )

    def maybe_reload(self) -> None:
        """Reload on mtime change; keep last good config on errors.

        Returns:
            None
        """
        try:
            self.load(force=False)
        except (ValueError, yaml.YAMLError, OSError) as exc:
            logger.error("failed to reload configuration: %s", exc)

    def _forward_rrs(self, name_lc: str, kind: RecordKind) -> list[RR]:
        """Build A/AAAA records for a fully qualified name in the zone.

        Malformed addresses are skipped with a warning.
        """
        zone = effective_zone(self.zone).lower()
        suffix = "." + zone
        if not name_lc.endswith(suffix):
            return []
        short = name_lc[: -len(suffix)]

        out: list[RR] = []
        hosts = self.hosts
        for host, rrmap in hosts.items():
            if host.lower() != short:
                continue
            label = DNSLabel(f"{host}.{zone}")
            for value in rrmap.get(kind, []):
                try:
                    if kind is RecordKind.A:
                        ipaddress.IPv4Address(value)
                        out.append(RR(label, QTYPE.A, rdata=A(value), ttl=self.default_ttl))
                    else:
                        ipaddress.IPv6Address(value)
                        out.append(RR(label, QTYPE.AAAA, rdata=AAAA(value), ttl=self.default_ttl))
                except ipaddress.AddressValueError:
                    logger.warning("invalid IP skipped: %s %s %s", host, kind.value, value)
                except (ValueError, IndexError):
                    logger.warning("invalid record skipped: %s %s %s", host, kind.value, value)
        return out

    def lookup(self, qname: DNSLabel, qtype: int) -> list[RR]:
        """Resolve records for the given query.

        Args:
            qname: Queried domain name (FQDN label).
            qtype: Numeric DNS type (`dnslib.QTYPE`).

        Returns:
            Answer records; empty when nothing matches.
        """
        answers: list[RR] = []

        if qtype == QTYPE.PTR:
            resolve_ptr(str(qname), self.zone, self.hosts, answers)
            return answers

        name = str(qname).lower()
        if qtype == QTYPE.ANY:
            for kind in FORWARD_ORDER:
                answers.extend(self._forward_rrs(name, kind))
        elif qtype == QTYPE.A:
            answers.extend(self._forward_rrs(name, RecordKind.A))
        elif qtype == QTYPE.AAAA:
            answers.extend(self._forward_rrs(name, RecordKind.AAAA))
        return answers
