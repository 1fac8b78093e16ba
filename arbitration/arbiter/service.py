"""
ARBITER - Arbitrator Service

Prices arbitration, escrows payments toward the fee, tells the oracle
when arbitration starts and submits the owner's binding answer.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from shared import (
    Answer,
    ArbitrationRequest,
    ArbitratorConfig,
    FeeNotConfigured,
    Principal,
    QuestionAlreadyFinalized,
    QuestionId,
    QuestionState,
    ServiceLogger,
    require_principal,
    to_bytes32,
    to_uint256,
)

from .access import Ownership, require_owner
from .events import (
    ArbitrationRequested,
    DefaultFeeChanged,
    Event,
    MetadataChanged,
    OracleChanged,
    OverrideFeeChanged,
    OwnershipTransferred,
    QuestionFeeChanged,
)
from .fees import FeeSchedule, get_effective_fee
from .ledger import BountyLedger
from .oracle_client import Oracle, OracleClient
from .treasury import Asset, NativeTransport, Treasury, withdraw_asset


@dataclass(frozen=True)
class Checkpoint:
    """Scalar fields plus the per-question entries of at most one question."""
    owner: Principal | None
    default_fee: int
    metadata: str
    native_balance: int
    requests_triggered: int
    question: QuestionId | None = None
    override: int = 0
    bounty: int | None = None  # None when the ledger has no entry
    question_state: QuestionState | None = None


@dataclass
class ArbitratorState:
    """Everything a failed call must leave untouched."""
    ownership: Ownership
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    ledger: BountyLedger = field(default_factory=BountyLedger)
    treasury: Treasury = field(default_factory=Treasury)
    metadata: str = ""
    requests_triggered: int = 0

    def checkpoint(self, question: QuestionId | None = None) -> Checkpoint:
        """
        Capture what a single call may change.

        Every operation touches the scalar fields and the entries of at
        most one question, so the cost does not grow with the ledger.
        """
        if question is None:
            per_question = {}
        else:
            per_question = {
                "question": question,
                "override": self.fees.override_for(question),
                "bounty": self.ledger.bounties.get(question),
                "question_state": self.ledger.states.get(question),
            }
        return Checkpoint(
            owner=self.ownership.owner,
            default_fee=self.fees.default_fee,
            metadata=self.metadata,
            native_balance=self.treasury.native_balance,
            requests_triggered=self.requests_triggered,
            **per_question,
        )

    def rollback(self, checkpoint: Checkpoint) -> None:
        """Put back everything captured by checkpoint."""
        self.ownership.owner = checkpoint.owner
        self.fees.default_fee = checkpoint.default_fee
        self.metadata = checkpoint.metadata
        self.treasury.native_balance = checkpoint.native_balance
        self.requests_triggered = checkpoint.requests_triggered

        question = checkpoint.question
        if question is None:
            return
        self.fees.set_override_fee(question, checkpoint.override)
        _restore(self.ledger.bounties, question, checkpoint.bounty)
        _restore(self.ledger.states, question, checkpoint.question_state)


def _restore(mapping: dict, key, value) -> None:
    if value is None:
        mapping.pop(key, None)
    else:
        mapping[key] = value


class Arbitrator:
    """
    Fee-gated arbitration authority for a question-answering oracle.

    Calls are serialized. Each one either commits completely or raises
    and leaves the state as it was; events are published only on commit.
    `caller` is the authenticated principal making the call.
    """

    def __init__(
        self,
        owner: Principal,
        address: Principal,
        oracle: Oracle,
        transport: NativeTransport,
        default_fee: int = 0,
        metadata: str = "",
    ):
        self.logger = ServiceLogger("ARBITER")
        self.address = require_principal(address, "arbitrator address")
        self.transport = transport
        self.oracle = OracleClient(oracle)

        self.state = ArbitratorState(ownership=Ownership(require_principal(owner, "owner")))
        self.state.fees.set_default_fee(default_fee)
        self.state.metadata = metadata

        self.event_handlers: list[Callable[[Event], None]] = []
        self.events: list[Event] = []
        self._pending: list[Event] = []

        self.logger.info(
            "Arbitrator initialized",
            owner=owner,
            oracle=self.oracle.address,
            default_fee=default_fee,
        )

    @classmethod
    def from_config(
        cls,
        config: ArbitratorConfig,
        oracle: Oracle,
        transport: NativeTransport,
    ) -> "Arbitrator":
        """Build an arbitrator from settings, forwarding the question fee if set."""
        arbitrator = cls(
            owner=config.owner,
            address=config.address,
            oracle=oracle,
            transport=transport,
            default_fee=config.default_dispute_fee,
            metadata=config.metadata,
        )
        if config.question_fee:
            arbitrator.set_question_fee(config.owner, config.question_fee)
        return arbitrator

    # ------------------------------------------------------------------
    # Plumbing

    @contextmanager
    def _transaction(
        self,
        operation: str,
        caller: Principal | None = None,
        question: QuestionId | None = None,
    ) -> Iterator[None]:
        # Only `question`'s entries are restored; no call may touch another one
        checkpoint = self.state.checkpoint(question)
        oracle = self.oracle
        self._pending = []
        try:
            yield
        except Exception as exc:
            self.state.rollback(checkpoint)
            self.oracle = oracle
            self._pending = []
            self.logger.warning(
                "Call rejected",
                operation=operation,
                caller=caller,
                error=type(exc).__name__,
                reason=str(exc),
            )
            raise

        committed, self._pending = self._pending, []
        for event in committed:
            self._publish(event)

    def _owner_only(self, caller: Principal, operation: str) -> None:
        require_owner(self.state.ownership, caller, operation)

    def _emit(self, event: Event) -> None:
        self._pending.append(event)

    def _publish(self, event: Event) -> None:
        self.events.append(event)
        for handler in self.event_handlers:
            try:
                handler(event)
            except Exception as e:
                self.logger.error("Handler error", error=str(e))

    def on_event(self, handler: Callable[[Event], None]) -> None:
        """Register event handler."""
        self.event_handlers.append(handler)

    # ------------------------------------------------------------------
    # Queries

    @property
    def owner(self) -> Principal | None:
        return self.state.ownership.owner

    @property
    def oracle_address(self) -> Principal:
        return self.oracle.address

    @property
    def default_fee(self) -> int:
        return self.state.fees.default_fee

    @property
    def metadata(self) -> str:
        return self.state.metadata

    @property
    def native_balance(self) -> int:
        return self.state.treasury.native_balance

    def override_fee(self, question: QuestionId | str) -> int:
        """Per-question override, zero when none is set."""
        return self.state.fees.override_for(to_bytes32(question))

    def get_effective_fee(self, question: QuestionId | str) -> int:
        """Dispute fee for a question. Zero means it will not be arbitrated."""
        return get_effective_fee(self.state.fees, to_bytes32(question))

    def arbitration_bounty(self, question: QuestionId | str) -> int:
        """Escrow paid toward the question so far."""
        return self.state.ledger.bounty(to_bytes32(question))

    def question_state(self, question: QuestionId | str) -> QuestionState:
        """Arbitration lifecycle state of the question."""
        return self.state.ledger.state(to_bytes32(question))

    # ------------------------------------------------------------------
    # Configuration

    def set_default_fee(self, caller: Principal, fee: int) -> None:
        with self._transaction("set_default_fee", caller):
            self._owner_only(caller, "set_default_fee")
            self.state.fees.set_default_fee(fee)
            self._emit(DefaultFeeChanged(fee=fee))
        self.logger.info("Default fee changed", fee=fee)

    def set_override_fee(self, caller: Principal, question: QuestionId | str, fee: int) -> None:
        question = to_bytes32(question)
        with self._transaction("set_override_fee", caller, question):
            self._owner_only(caller, "set_override_fee")
            self.state.fees.set_override_fee(question, fee)
            self._emit(OverrideFeeChanged(question=question, fee=fee))
        self.logger.info("Override fee changed", question=question.hex(), fee=fee)

    def set_question_fee(self, caller: Principal, fee: int) -> None:
        """Set what the oracle charges to ask questions naming this arbitrator."""
        with self._transaction("set_question_fee", caller):
            self._owner_only(caller, "set_question_fee")
            fee = to_uint256(fee, "fee")
            self.oracle.set_question_fee(fee)
            self._emit(QuestionFeeChanged(fee=fee))
        self.logger.info("Question fee forwarded to oracle", fee=fee)

    def set_oracle(self, caller: Principal, oracle: Oracle) -> None:
        with self._transaction("set_oracle", caller):
            self._owner_only(caller, "set_oracle")
            client = OracleClient(oracle)
            self.oracle = client
            self._emit(OracleChanged(oracle=client.address))
        self.logger.info("Oracle changed", oracle=client.address)

    def set_metadata(self, caller: Principal, metadata: str) -> None:
        with self._transaction("set_metadata", caller):
            self._owner_only(caller, "set_metadata")
            self.state.metadata = metadata
            self._emit(MetadataChanged(metadata=metadata))

    def transfer_ownership(self, caller: Principal, new_owner: Principal) -> None:
        with self._transaction("transfer_ownership", caller):
            self._owner_only(caller, "transfer_ownership")
            previous = self.state.ownership.transfer(new_owner)
            self._emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))
        self.logger.info("Ownership transferred", previous=previous, new_owner=new_owner)

    def renounce_ownership(self, caller: Principal) -> None:
        with self._transaction("renounce_ownership", caller):
            self._owner_only(caller, "renounce_ownership")
            previous = self.state.ownership.renounce()
            self._emit(OwnershipTransferred(previous_owner=previous, new_owner=None))
        self.logger.info("Ownership renounced", previous=previous)

    # ------------------------------------------------------------------
    # Arbitration

    def request_arbitration(
        self,
        caller: Principal,
        question: QuestionId | str,
        max_previous_bond: int,
        payment: int,
    ) -> ArbitrationRequest:
        """
        Pay toward a question's dispute fee.

        The payment that takes the escrow to the fee notifies the oracle,
        naming the caller as requester of record. Below the fee, the
        question must not be finalized yet. Either failure undoes the
        payment.
        """
        question = to_bytes32(question)
        with self._transaction("request_arbitration", caller, question):
            caller = require_principal(caller, "caller")
            max_previous_bond = to_uint256(max_previous_bond, "max_previous_bond")

            fee = get_effective_fee(self.state.fees, question)
            if fee == 0:
                raise FeeNotConfigured(question)

            ledger = self.state.ledger
            paid = ledger.add(question, payment)
            self.state.treasury.receive(payment)

            if paid >= fee:
                ledger.mark_requested(question)
                self.oracle.notify_arbitration_requested(question, caller, max_previous_bond)
                self.state.requests_triggered += 1
                remaining = 0
            else:
                # Crossing path leaves finalization to the oracle's own notify check
                if self.oracle.is_finalized(question):
                    raise QuestionAlreadyFinalized(question)
                remaining = fee - paid

            self._emit(ArbitrationRequested(
                question=question,
                amount_paid=payment,
                payer=caller,
                remaining_to_threshold=remaining,
            ))

        self.logger.info(
            "Arbitration payment accepted",
            question=question.hex(),
            payer=caller,
            amount_paid=payment,
            escrowed=paid,
            remaining=remaining,
            triggered=remaining == 0,
        )
        return ArbitrationRequest(triggered=remaining == 0, escrowed=paid, remaining=remaining)

    def submit_arbitrator_answer(
        self,
        caller: Principal,
        question: QuestionId | str,
        answer: Answer | str,
        answerer: Principal,
    ) -> None:
        """Clear the question's escrow and hand the final answer to the oracle."""
        question = to_bytes32(question)
        with self._transaction("submit_arbitrator_answer", caller, question):
            self._owner_only(caller, "submit_arbitrator_answer")
            answer = to_bytes32(answer, "answer")
            answerer = require_principal(answerer, "answerer")
            released = self.state.ledger.clear(question)
            self.oracle.submit_arbitrator_answer(question, answer, answerer)

        self.logger.info(
            "Arbitrator answer submitted",
            question=question.hex(),
            answerer=answerer,
            released=released,
        )

    # ------------------------------------------------------------------
    # Treasury

    def receive(self, sender: Principal, amount: int) -> None:
        """Accept unsolicited native value. Deliberately has no other effect."""
        with self._transaction("receive", sender):
            self.state.treasury.receive(amount)

    def withdraw_native(self, caller: Principal, recipient: Principal) -> int:
        """Send the whole native balance to recipient. Returns the amount."""
        with self._transaction("withdraw_native", caller):
            self._owner_only(caller, "withdraw_native")
            recipient = require_principal(recipient, "recipient")
            amount = self.state.treasury.withdraw_native(self.transport, recipient)
        self.logger.info("Native balance withdrawn", recipient=recipient, amount=amount)
        return amount

    def withdraw_asset(self, caller: Principal, asset: Asset, recipient: Principal) -> int:
        """Send the arbitrator's whole balance of asset to recipient. Returns the amount."""
        with self._transaction("withdraw_asset", caller):
            self._owner_only(caller, "withdraw_asset")
            recipient = require_principal(recipient, "recipient")
            amount = withdraw_asset(asset, self.address, recipient)
        self.logger.info("Asset balance withdrawn", recipient=recipient, amount=amount)
        return amount

    def pull_fees_from_oracle(self, caller: Principal) -> int:
        """Move fees the oracle holds for us into the native balance."""
        with self._transaction("pull_fees_from_oracle", caller):
            self._owner_only(caller, "pull_fees_from_oracle")
            released = self.oracle.withdraw_fees()
            self.state.treasury.receive(released)
        self.logger.info("Fees pulled from oracle", amount=released)
        return released

    def get_stats(self) -> dict:
        """Get arbitrator statistics."""
        ledger = self.state.ledger
        return {
            "default_fee": self.state.fees.default_fee,
            "overrides": len(self.state.fees.overrides),
            "open_escrows": len(ledger.open_questions()),
            "total_escrowed": ledger.total_escrowed(),
            "native_balance": self.state.treasury.native_balance,
            "requests_triggered": self.state.requests_triggered,
        }
