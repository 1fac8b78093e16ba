"""
ARBITER - Access Control

Single-owner authorization.
"""

from dataclasses import dataclass

from shared import Principal, Unauthorized, require_principal


@dataclass
class Ownership:
    """Current owner, or None once renounced."""
    owner: Principal | None = None

    def transfer(self, new_owner: Principal) -> Principal | None:
        """Hand over all privileges. Returns the previous owner."""
        new_owner = require_principal(new_owner, "new owner")
        previous, self.owner = self.owner, new_owner
        return previous

    def renounce(self) -> Principal | None:
        """Drop the owner. Owner-only operations are disabled for good."""
        previous, self.owner = self.owner, None
        return previous


def require_owner(ownership: Ownership, caller: Principal, operation: str) -> None:
    """Raise Unauthorized unless caller is the current owner."""
    if ownership.owner is None or caller != ownership.owner:
        raise Unauthorized(caller, operation)
