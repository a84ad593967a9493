"""
문서 번호 발급

- 세금계산서: INV-{회계연도}-{일련번호 4자리} (예: INV-2080-81-0001)
- 매입 계산서: 공급자 계산서 번호가 없으면 BILL-{일련번호 4자리}
"""

import threading


class DocumentNumberer:
    """문서 번호 발급기

    Args:
        fiscal_year: 회계연도 (예: 2080/81)
        invoice_seq: 마지막 세금계산서 일련번호 (복원용)
        bill_seq: 마지막 매입 계산서 일련번호 (복원용)
    """

    def __init__(self, fiscal_year: str, invoice_seq: int = 0, bill_seq: int = 0):
        self.fiscal_year = fiscal_year
        self._invoice_seq = invoice_seq
        self._bill_seq = bill_seq
        self._lock = threading.Lock()

    @property
    def fiscal_year_tag(self) -> str:
        return self.fiscal_year.replace("/", "-")

    def next_invoice_number(self) -> str:
        with self._lock:
            self._invoice_seq += 1
            return f"INV-{self.fiscal_year_tag}-{self._invoice_seq:04d}"

    def next_bill_number(self) -> str:
        with self._lock:
            self._bill_seq += 1
            return f"BILL-{self._bill_seq:04d}"

    def state(self) -> dict[str, int]:
        return {"invoice_seq": self._invoice_seq, "bill_seq": self._bill_seq}
