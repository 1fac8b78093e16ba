"""
Error taxonomy for the arbitrator service.

Every error aborts the call that raised it and leaves fees, escrow,
metadata, ownership and balances exactly as they were.
"""


class ArbitratorError(Exception):
    """Base exception for arbitrator operations."""


class Unauthorized(ArbitratorError):
    """Caller is not the current owner."""

    def __init__(self, caller: str | None, operation: str):
        self.caller = caller
        self.operation = operation
        super().__init__(f"{caller!r} may not call {operation}")


class FeeNotConfigured(ArbitratorError):
    """Effective dispute fee is zero, arbitration is refused."""

    def __init__(self, question: bytes):
        self.question = question
        super().__init__(f"No dispute fee configured for question 0x{question.hex()}")


class QuestionAlreadyFinalized(ArbitratorError):
    """Payment stayed below the fee but the question is already closed."""

    def __init__(self, question: bytes):
        self.question = question
        super().__init__(f"Question 0x{question.hex()} is already finalized")


class OracleCallFailed(ArbitratorError):
    """The oracle rejected or failed a call. The original error is __cause__."""

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Oracle call {operation} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TransferFailed(ArbitratorError):
    """A native or asset withdrawal could not complete."""

    def __init__(self, recipient: str, amount: int, reason: str = ""):
        self.recipient = recipient
        self.amount = amount
        self.reason = reason
        message = f"Transfer of {amount} to {recipient} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
