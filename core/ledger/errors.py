"""
Ledger 예외 정의

- 무결성 오류: 알 수 없는 계정 (경고 후 계속, 예외 아님)
- 조회 오류: AccountNotFoundError
- 불변식 위반: UnbalancedEntryError 등 (분개가 로그에 들어가면 안 됨)
"""


class LedgerError(Exception):
    """Ledger 예외 기본 클래스"""

    pass


class UnbalancedEntryError(LedgerError):
    """차변 합계 != 대변 합계

    분개 생성 로직의 버그. 런타임에 복구할 대상이 아님.
    """

    pass


class InvalidJournalLineError(LedgerError):
    """음수 금액 등 잘못된 분개 항목"""

    pass


class DuplicateEntryError(LedgerError):
    """이미 기록된 entry_id로 다시 기록 시도"""

    pass


class AccountNotFoundError(LedgerError):
    """계정과목표에 없는 계정"""

    pass


class SystemAccountError(LedgerError):
    """시스템 계정 삭제/변경 시도"""

    pass
