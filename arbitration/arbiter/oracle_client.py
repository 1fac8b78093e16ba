"""
ARBITER - Oracle Client

Adapter over the external question-answering oracle.
"""

from typing import Protocol, runtime_checkable

from shared import Answer, OracleCallFailed, Principal, QuestionId, ServiceLogger, to_uint256


@runtime_checkable
class Oracle(Protocol):
    """Operations the arbitrator consumes from the oracle."""

    address: Principal

    def set_question_fee(self, fee: int) -> None: ...

    def notify_arbitration_requested(
        self,
        question: QuestionId,
        requester: Principal,
        max_previous_bond: int,
    ) -> None: ...

    def submit_arbitrator_answer(
        self,
        question: QuestionId,
        answer: Answer,
        answerer: Principal,
    ) -> None: ...

    def is_finalized(self, question: QuestionId) -> bool: ...

    def withdraw_fees(self) -> int:
        """Release fees owed to the caller. Returns the amount released."""
        ...


class OracleClient:
    """
    Wraps an Oracle so every failure surfaces as OracleCallFailed.

    The original exception is chained as __cause__.
    """

    def __init__(self, oracle: Oracle):
        self.oracle = oracle
        self.logger = ServiceLogger("ARBITER-ORACLE").bind(oracle=oracle.address)

    @property
    def address(self) -> Principal:
        return self.oracle.address

    def _call(self, operation: str, *args):
        try:
            return getattr(self.oracle, operation)(*args)
        except Exception as exc:
            self.logger.warning("Oracle call failed", operation=operation, reason=str(exc))
            raise OracleCallFailed(operation, str(exc)) from exc

    def set_question_fee(self, fee: int) -> None:
        self._call("set_question_fee", fee)

    def notify_arbitration_requested(
        self,
        question: QuestionId,
        requester: Principal,
        max_previous_bond: int,
    ) -> None:
        self._call("notify_arbitration_requested", question, requester, max_previous_bond)
        self.logger.info(
            "Oracle notified of arbitration request",
            question=question.hex(),
            requester=requester,
        )

    def submit_arbitrator_answer(
        self,
        question: QuestionId,
        answer: Answer,
        answerer: Principal,
    ) -> None:
        self._call("submit_arbitrator_answer", question, answer, answerer)

    def is_finalized(self, question: QuestionId) -> bool:
        return bool(self._call("is_finalized", question))

    def withdraw_fees(self) -> int:
        """Pull fees owed to the arbitrator. Returns the amount released."""
        released = self._call("withdraw_fees")
        try:
            return to_uint256(released or 0, "released fees")
        except ValueError as exc:
            self.logger.warning("Oracle returned a bad amount", operation="withdraw_fees", released=repr(released))
            raise OracleCallFailed("withdraw_fees", str(exc)) from exc
