"""
ARBITER - Treasury

Native balance held by the arbitrator and withdrawal of held assets.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from shared import UINT256_MAX, Principal, TransferFailed, to_uint256


@runtime_checkable
class Asset(Protocol):
    """Standard fungible-asset transfer interface."""

    def transfer(self, recipient: Principal, amount: int) -> bool: ...

    def balance_of(self, holder: Principal) -> int: ...


@runtime_checkable
class NativeTransport(Protocol):
    """Moves native currency out of the arbitrator's account."""

    def send(self, recipient: Principal, amount: int) -> bool:
        """Returns False if the recipient refuses the value."""
        ...


@dataclass
class Treasury:
    """Withdrawable native-currency balance."""
    native_balance: int = 0

    def receive(self, amount: int) -> None:
        """Credit incoming value. No other effect."""
        amount = to_uint256(amount)
        if self.native_balance + amount > UINT256_MAX:
            raise ValueError("native balance would overflow uint256")
        self.native_balance += amount

    def withdraw_native(self, transport: NativeTransport, recipient: Principal) -> int:
        """Send the whole native balance. The balance is untouched on failure."""
        amount = self.native_balance
        try:
            sent = transport.send(recipient, amount)
        except Exception as exc:
            raise TransferFailed(recipient, amount, str(exc)) from exc
        if not sent:
            raise TransferFailed(recipient, amount, "recipient refused the transfer")

        self.native_balance = 0
        return amount


def withdraw_asset(asset: Asset, holder: Principal, recipient: Principal) -> int:
    """Transfer holder's entire balance of asset to recipient."""
    try:
        amount = to_uint256(asset.balance_of(holder), "asset balance")
    except Exception as exc:
        raise TransferFailed(recipient, 0, str(exc)) from exc
    try:
        ok = asset.transfer(recipient, amount)
    except Exception as exc:
        raise TransferFailed(recipient, amount, str(exc)) from exc
    if not ok:
        raise TransferFailed(recipient, amount, "asset transfer reported failure")
    return amount
