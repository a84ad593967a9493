"""
계정과목표 (Chart of Accounts)

초기화 시 한 번 생성되는 고정 계정 목록.
계정 유형과 정상 잔액 방향을 제공한다.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Iterable

from core.ledger.errors import AccountNotFoundError, SystemAccountError
from core.ledger.types import INITIAL_ACCOUNTS, NORMAL_BALANCE, AccountType, JournalSide


@dataclass(frozen=True)
class Account:
    """계정

    balance는 분개 로그에서 재계산되는 캐시 값.
    직접 수정하지 않고 with_balance()로 새 인스턴스를 만든다.
    """

    id: str
    code: str
    name: str
    account_type: AccountType
    balance: Decimal = Decimal("0")
    is_system: bool = False

    @property
    def normal_side(self) -> JournalSide:
        """정상 잔액 방향"""
        return NORMAL_BALANCE[self.account_type]

    def with_balance(self, balance: Decimal) -> Account:
        return replace(self, balance=balance)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "type": self.account_type.value,
            "balance": str(self.balance),
            "is_system": self.is_system,
        }


class ChartOfAccounts:
    """계정과목표

    계정 추가/번호 변경 기능 없음. 삭제는 시스템 계정이 아닌 경우만 허용.

    Args:
        accounts: 초기 계정 목록 (None이면 INITIAL_ACCOUNTS)
    """

    def __init__(self, accounts: Iterable[Account] | None = None):
        if accounts is None:
            accounts = self.default_accounts()
        self._accounts: dict[str, Account] = {}
        for account in accounts:
            self._accounts[account.id] = account.with_balance(Decimal("0"))

    @staticmethod
    def default_accounts() -> list[Account]:
        """INITIAL_ACCOUNTS에서 계정 생성"""
        return [
            Account(
                id=account_id,
                code=account_id,
                name=name,
                account_type=AccountType(account_type),
                is_system=is_system,
            )
            for account_id, account_type, name, is_system in INITIAL_ACCOUNTS
        ]

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)

    def get(self, account_id: str) -> Account:
        """계정 조회

        Raises:
            AccountNotFoundError: 없는 계정
        """
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(f"Unknown account: {account_id}")
        return account

    def normal_side(self, account_id: str) -> JournalSide:
        return self.get(account_id).normal_side

    def accounts(self) -> list[Account]:
        """계정 목록 (코드 순)"""
        return sorted(self._accounts.values(), key=lambda a: a.code)

    def by_type(self, account_type: AccountType) -> list[Account]:
        return [a for a in self.accounts() if a.account_type == account_type]

    def ensure_deletable(self, account_id: str) -> None:
        """삭제 가능 여부 검증

        Raises:
            AccountNotFoundError: 없는 계정
            SystemAccountError: 시스템 계정
        """
        account = self.get(account_id)
        if account.is_system:
            raise SystemAccountError(
                f"System account cannot be deleted: {account.code} {account.name}"
            )

    def delete(self, account_id: str) -> Account:
        """비시스템 계정 삭제

        분개에서 참조 중인 계정을 지우면 이후 재계산에서 무결성 경고로 처리된다.
        """
        self.ensure_deletable(account_id)
        return self._accounts.pop(account_id)
