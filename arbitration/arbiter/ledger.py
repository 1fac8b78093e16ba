"""
ARBITER - Bounty Ledger

Per-question escrow of payments toward the dispute fee.
"""

from dataclasses import dataclass, field

from shared import UINT256_MAX, QuestionId, QuestionState, to_uint256


@dataclass
class BountyLedger:
    """
    Cumulative escrow per question.

    Only amounts are stored, not who paid them. The payer whose call
    crosses the fee threshold becomes the requester of record.
    """
    bounties: dict[QuestionId, int] = field(default_factory=dict)
    states: dict[QuestionId, QuestionState] = field(default_factory=dict)

    def bounty(self, question: QuestionId) -> int:
        """Escrow currently held for question."""
        return self.bounties.get(question, 0)

    def state(self, question: QuestionId) -> QuestionState:
        """Lifecycle state, UNREQUESTED for questions never paid for."""
        return self.states.get(question, QuestionState.UNREQUESTED)

    def add(self, question: QuestionId, amount: int) -> int:
        """Add a payment to the escrow. Returns the new cumulative amount."""
        amount = to_uint256(amount, "payment")
        total = self.bounty(question) + amount
        if total > UINT256_MAX:
            raise ValueError("escrow would overflow uint256")

        self.bounties[question] = total
        if self.state(question) != QuestionState.REQUESTED:
            self.states[question] = QuestionState.ACCUMULATING
        return total

    def mark_requested(self, question: QuestionId) -> None:
        """Record that the fee threshold was crossed."""
        self.states[question] = QuestionState.REQUESTED

    def clear(self, question: QuestionId) -> int:
        """Zero the escrow and mark the question resolved. Returns the released amount."""
        released = self.bounties.pop(question, 0)
        self.states[question] = QuestionState.RESOLVED
        return released

    def open_questions(self) -> list[QuestionId]:
        """Questions holding a nonzero escrow."""
        return [q for q, amount in self.bounties.items() if amount > 0]

    def total_escrowed(self) -> int:
        """Sum of escrow across all questions."""
        return sum(self.bounties.values())
