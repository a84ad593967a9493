"""
Ledger 저장소

분개 로그(append-only)와 파생 잔액 테이블을 하나의 잠금 아래에서 관리.
모든 변경은 _commit() 단일 진입점을 거쳐 로그 교체 + 전체 재계산을 원자적으로 수행.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterator

from core.ledger.accounts import Account, ChartOfAccounts
from core.ledger.balance import BalanceRecomputation, recompute_balances, signed_contribution
from core.ledger.entry_builder import JournalEntry, validate_entry
from core.ledger.errors import DuplicateEntryError
from core.ledger.statements import generate_trial_balance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurgeResult:
    """참조 기반 분개 삭제 결과

    removed가 비어 있으면 일치하는 분개가 없었음 (no-op).
    """

    references: tuple[str, ...]
    removed: tuple[JournalEntry, ...]

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    @property
    def applied(self) -> bool:
        return bool(self.removed)


class LedgerStore:
    """Ledger 저장소

    분개 로그와 계정 잔액을 소유하는 명시적 원장 객체.
    잔액은 로그가 바뀔 때마다 처음부터 재계산된다.

    Args:
        chart: 계정과목표 (None이면 기본 계정과목표)
        entries: 초기 분개 (복원용)
    """

    def __init__(
        self,
        chart: ChartOfAccounts | None = None,
        entries: list[JournalEntry] | None = None,
    ):
        self.chart = chart or ChartOfAccounts()
        self._lock = threading.RLock()
        self._entries: list[JournalEntry] = []
        self._last_recompute = recompute_balances(self.chart, [])

        if entries:
            self._commit(list(entries))

    @contextmanager
    def transaction(self) -> Iterator[LedgerStore]:
        """원장 잠금 획득

        문서 변경 + 분개 기록을 하나의 단위로 묶을 때 사용.
        재진입 가능 (save_entry 등 내부 호출과 중첩 가능).
        """
        with self._lock:
            yield self

    def _commit(self, new_entries: list[JournalEntry]) -> BalanceRecomputation:
        """로그 교체 + 잔액 재계산

        재계산이 끝난 뒤에만 로그와 잔액을 함께 교체 (중간 상태 노출 없음).
        """
        with self._lock:
            recomputation = recompute_balances(self.chart, new_entries)
            self._entries = new_entries
            self._last_recompute = recomputation
            return recomputation

    def save_entry(self, entry: JournalEntry) -> str:
        """분개 기록

        Args:
            entry: 기록할 분개

        Returns:
            기록된 entry_id

        Raises:
            UnbalancedEntryError: 불균형 분개인 경우
            InvalidJournalLineError: 음수 금액 등
            DuplicateEntryError: 이미 기록된 entry_id
        """
        validate_entry(entry)

        with self._lock:
            if any(e.entry_id == entry.entry_id for e in self._entries):
                raise DuplicateEntryError(f"Entry already posted: {entry.entry_id}")
            self._commit([*self._entries, entry])

        logger.debug(f"Saved journal entry: {entry.entry_id} ({entry.reference})")
        return entry.entry_id

    def remove_by_reference(self, *references: str) -> PurgeResult:
        """참조로 분개 삭제

        문서에 연결된 분개(related_document_id 있음)는 문서 ID로만 일치시킨다.
        reference 문자열은 연결 문서가 없는 분개에만 적용.
        개별 항목 금액 수정은 지원하지 않음.

        Args:
            references: 문서 ID / 문서 번호

        Returns:
            PurgeResult (삭제된 분개 목록)
        """
        targets = {ref for ref in references if ref}

        with self._lock:
            kept: list[JournalEntry] = []
            removed: list[JournalEntry] = []
            for entry in self._entries:
                if entry.related_document_id is not None:
                    matched = entry.related_document_id in targets
                else:
                    matched = entry.reference in targets
                if matched:
                    removed.append(entry)
                else:
                    kept.append(entry)

            if removed:
                self._commit(kept)

        if removed:
            logger.info(
                f"Purged {len(removed)} journal entries for {sorted(targets)}"
            )
        else:
            logger.info(f"No journal entries matched {sorted(targets)}")

        return PurgeResult(references=tuple(references), removed=tuple(removed))

    def recompute(self) -> BalanceRecomputation:
        """현재 로그로 전체 잔액 재계산 (검증용)"""
        with self._lock:
            return self._commit(list(self._entries))

    @property
    def last_recompute(self) -> BalanceRecomputation:
        """마지막 재계산 결과"""
        return self._last_recompute

    # =========================================================================
    # 조회
    # =========================================================================

    def entries(self) -> list[JournalEntry]:
        """분개 로그 사본 (기록 순서)"""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        """분개 단건 조회"""
        with self._lock:
            for entry in self._entries:
                if entry.entry_id == entry_id:
                    return entry
        return None

    def get_entries_by_reference(self, reference: str) -> list[JournalEntry]:
        """참조(문서 번호 또는 문서 ID)로 분개 조회"""
        with self._lock:
            return [
                e for e in self._entries
                if e.reference == reference or e.related_document_id == reference
            ]

    def get_account_balance(self, account_id: str) -> Decimal:
        """계정 잔액 조회

        Raises:
            AccountNotFoundError: 없는 계정
        """
        self.chart.get(account_id)
        with self._lock:
            return self._last_recompute.balances.get(account_id, Decimal("0"))

    def get_accounts(self) -> list[Account]:
        """잔액이 반영된 계정 목록 (코드 순)"""
        with self._lock:
            return self._last_recompute.apply_to(self.chart)

    def get_trial_balance(self) -> list[dict[str, Any]]:
        """시산표 조회

        Returns:
            계정별 잔액 목록 (차변/대변 열 포함)
        """
        return generate_trial_balance(self.get_accounts())

    def get_account_ledger(
        self,
        account_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """계정별 원장 (General Ledger)

        특정 계정을 참조하는 모든 분개 항목과 누적 잔액.
        로그 순서로 누적 후 최신순으로 반환.

        Args:
            account_id: 계정 ID
            limit: 조회 개수 제한
            offset: 시작 위치

        Returns:
            분개 항목 목록
        """
        account = self.chart.get(account_id)
        running = Decimal("0")
        rows: list[dict[str, Any]] = []

        for entry in self.entries():
            for line in entry.lines:
                if line.account_id != account_id:
                    continue
                running += signed_contribution(account.normal_side, line.debit, line.credit)
                rows.append({
                    "entry_id": entry.entry_id,
                    "date": entry.date,
                    "reference": entry.reference,
                    "description": entry.description,
                    "transaction_type": entry.transaction_type,
                    "debit": line.debit,
                    "credit": line.credit,
                    "running_balance": running,
                })

        rows.reverse()
        return rows[offset:offset + limit]

    # =========================================================================
    # 외부 저장소 연동 (저장 형식은 호출자가 결정)
    # =========================================================================

    def to_records(self) -> list[dict[str, Any]]:
        """분개 로그 → 직렬화 가능한 dict 목록"""
        return [entry.to_dict() for entry in self.entries()]

    @classmethod
    def from_records(
        cls,
        records: list[dict[str, Any]],
        chart: ChartOfAccounts | None = None,
    ) -> LedgerStore:
        """dict 목록에서 원장 복원

        복원 시에도 모든 분개의 균형을 다시 검증한다.
        """
        entries = [JournalEntry.from_dict(record) for record in records]
        for entry in entries:
            validate_entry(entry)
        return cls(chart=chart, entries=entries)
