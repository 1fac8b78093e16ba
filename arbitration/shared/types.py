"""
Shared types for the arbitrator service.
"""

from dataclasses import dataclass
from enum import Enum

UINT256_MAX = 2**256 - 1

Principal = str  # Address-like identity
QuestionId = bytes  # 32 bytes, owned by the oracle
Answer = bytes  # 32 bytes


class QuestionState(str, Enum):
    """Arbitration lifecycle of a single question."""
    UNREQUESTED = "unrequested"
    ACCUMULATING = "accumulating"
    REQUESTED = "requested"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class ArbitrationRequest:
    """Outcome of a request_arbitration call."""
    triggered: bool
    escrowed: int  # Cumulative escrow for the question, wei
    remaining: int  # Still owed before the fee threshold, wei


def to_bytes32(value: bytes | str, what: str = "question") -> bytes:
    """Normalize raw bytes or a 0x-prefixed hex string to 32 bytes."""
    if isinstance(value, str):
        text = value[2:] if value.startswith("0x") else value
        try:
            value = bytes.fromhex(text)
        except ValueError:
            raise ValueError(f"{what} is not valid hex: {value!r}") from None
    if not isinstance(value, (bytes, bytearray)) or len(value) != 32:
        raise ValueError(f"{what} must be exactly 32 bytes")
    return bytes(value)


def to_uint256(value: int, what: str = "amount") -> int:
    """Check that value fits an unsigned 256-bit integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{what} out of uint256 range: {value}")
    return value


def require_principal(value: Principal | None, what: str = "principal") -> Principal:
    """Reject empty identities."""
    if not value:
        raise ValueError(f"{what} must be a non-empty identity")
    return value
