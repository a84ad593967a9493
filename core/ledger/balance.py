"""
잔액 엔진

전체 분개 로그에서 모든 계정 잔액을 처음부터 재계산.
증분 갱신 없음: 잔액은 항상 로그의 순수 함수.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from core.ledger.accounts import Account, ChartOfAccounts
from core.ledger.entry_builder import JournalEntry
from core.ledger.types import JournalSide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceRecomputation:
    """재계산 결과

    unknown_account_ids: 계정과목표에 없는 계정을 참조한 항목 (무결성 오류)
    """

    balances: dict[str, Decimal]
    unknown_account_ids: tuple[str, ...] = field(default_factory=tuple)
    entry_count: int = 0

    @property
    def has_integrity_errors(self) -> bool:
        return bool(self.unknown_account_ids)

    def apply_to(self, chart: ChartOfAccounts) -> list[Account]:
        """계정 목록에 잔액을 입힌 사본 반환"""
        return [
            account.with_balance(self.balances.get(account.id, Decimal("0")))
            for account in chart.accounts()
        ]


def signed_contribution(normal_side: JournalSide, debit: Decimal, credit: Decimal) -> Decimal:
    """정상 잔액 방향 기준 증감액

    DEBIT 정상 계정: debit - credit
    CREDIT 정상 계정: credit - debit
    """
    if normal_side == JournalSide.DEBIT:
        return debit - credit
    return credit - debit


def recompute_balances(
    chart: ChartOfAccounts,
    entries: Iterable[JournalEntry],
) -> BalanceRecomputation:
    """모든 계정 잔액 재계산

    캐시된 잔액은 무시하고 0에서 시작. 로그 순서대로 모든 항목을 반영.
    알 수 없는 계정은 건너뛰고 경고 로그 (치명적 오류 아님).

    Args:
        chart: 계정과목표
        entries: 분개 로그 (순서대로)

    Returns:
        BalanceRecomputation
    """
    balances: dict[str, Decimal] = {account.id: Decimal("0") for account in chart.accounts()}
    normal_sides = {account.id: account.normal_side for account in chart.accounts()}
    unknown: list[str] = []
    entry_count = 0

    for entry in entries:
        entry_count += 1
        for line in entry.lines:
            side = normal_sides.get(line.account_id)
            if side is None:
                logger.warning(
                    f"Integrity: entry {entry.entry_id} references unknown account "
                    f"{line.account_id} (debit={line.debit}, credit={line.credit}), skipped"
                )
                if line.account_id not in unknown:
                    unknown.append(line.account_id)
                continue
            balances[line.account_id] += signed_contribution(side, line.debit, line.credit)

    return BalanceRecomputation(
        balances=balances,
        unknown_account_ids=tuple(unknown),
        entry_count=entry_count,
    )
