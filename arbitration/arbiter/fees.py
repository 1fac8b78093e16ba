"""
ARBITER - Fee Schedule

Default dispute fee plus per-question overrides.
"""

from dataclasses import dataclass, field

from shared import QuestionId, to_uint256


@dataclass
class FeeSchedule:
    """
    Prices arbitration per question.

    An override of zero means "no override", not "free". An effective
    fee of zero means the arbitrator will not take the question.
    """
    default_fee: int = 0
    overrides: dict[QuestionId, int] = field(default_factory=dict)

    def set_default_fee(self, fee: int) -> None:
        """Set the global dispute fee."""
        self.default_fee = to_uint256(fee, "fee")

    def set_override_fee(self, question: QuestionId, fee: int) -> None:
        """Set or replace the fee for one question."""
        fee = to_uint256(fee, "fee")
        if fee == 0:
            # Zero and absent read the same; keep the mapping sparse
            self.overrides.pop(question, None)
        else:
            self.overrides[question] = fee

    def override_for(self, question: QuestionId) -> int:
        """Stored override for question, zero when none is set."""
        return self.overrides.get(question, 0)


def get_effective_fee(schedule: FeeSchedule, question: QuestionId) -> int:
    """Override if nonzero, else the default fee."""
    override = schedule.override_for(question)
    return override if override > 0 else schedule.default_fee
