"""
State Machines

세금계산서(Invoice), 매입 계산서(PurchaseBill)의 결제 상태 전이 관리.
"""

import logging
from decimal import Decimal
from enum import Enum

from core.constants import Money

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class DocumentStatus(str, Enum):
    """문서 결제 상태

    전이 규칙 (결제 적용 시에만 전이):
    - SENT/RECEIVED → PARTIAL: 잔액 > 0.5
    - SENT/RECEIVED → PAID: 잔액 <= 0.5
    - PARTIAL → PARTIAL: 추가 부분 결제
    - PARTIAL → PAID: 완납

    DRAFT는 호출자가 직접 만든 경우에만 존재하며 자동 전이 없음.
    VOID는 진입 경로가 없는 종료 상태.
    """
    DRAFT = "DRAFT"
    SENT = "SENT"  # 매출 문서 초기 상태
    RECEIVED = "RECEIVED"  # 매입 문서 초기 상태
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    VOID = "VOID"


TERMINAL_STATES: frozenset[str] = frozenset({"PAID", "VOID"})


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인

        Args:
            to_state: 목표 상태

        Returns:
            전이 가능 여부
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(
            f"{self._name}: {old_state} → {target}",
        )

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


class PaymentStatusMachine(StateMachine):
    """결제 상태 머신 공통

    하위 클래스는 TRANSITIONS만 정의.
    """

    TRANSITIONS: dict[str, list[str]] = {}

    def __init__(self, initial_state: str | DocumentStatus, name: str):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name=name,
        )

    @property
    def is_terminal(self) -> bool:
        """종료 상태 여부"""
        return self._state in TERMINAL_STATES

    @property
    def accepts_payment(self) -> bool:
        """결제 적용 가능 여부"""
        return bool(self._transitions.get(self._state))

    def apply_due_amount(self, due_amount: Decimal) -> str:
        """결제 후 잔액으로 상태 재분류"""
        return self.transition(classify_payment_status(due_amount))


class InvoiceStateMachine(PaymentStatusMachine):
    """매출 세금계산서 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "SENT": ["PARTIAL", "PAID"],
        "PARTIAL": ["PARTIAL", "PAID"],
    }

    def __init__(self, initial_state: str | DocumentStatus = DocumentStatus.SENT):
        super().__init__(initial_state, name="InvoiceStateMachine")


class PurchaseStateMachine(PaymentStatusMachine):
    """매입 계산서 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "RECEIVED": ["PARTIAL", "PAID"],
        "PARTIAL": ["PARTIAL", "PAID"],
    }

    def __init__(self, initial_state: str | DocumentStatus = DocumentStatus.RECEIVED):
        super().__init__(initial_state, name="PurchaseStateMachine")


def classify_payment_status(due_amount: Decimal) -> DocumentStatus:
    """결제 후 잔액 → 상태

    완납 판정은 0이 아닌 0.5 허용 오차 기준.

    Args:
        due_amount: total - paid (음수 가능)

    Returns:
        PAID 또는 PARTIAL
    """
    if due_amount <= Money.FULLY_PAID_TOLERANCE:
        return DocumentStatus.PAID
    return DocumentStatus.PARTIAL
