"""Data structures shared by the host table and the PTR resolver."""
from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence, Union

# Fixed TTL for synthesized PTR answers.
PTR_TTL = 60
DEFAULT_ZONE = "local."


class RecordKind(str, Enum):
    """Forward record kinds stored in the host table.

    Members compare and hash like their string value, so ``"A"`` keys read
    from YAML index a host entry the same way ``RecordKind.A`` does.
    """

    A = "A"
    AAAA = "AAAA"


# short hostname -> record kind -> ordered address strings
HostTable = Mapping[str, Mapping[Union[RecordKind, str], Sequence[str]]]
