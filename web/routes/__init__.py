"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- dashboard: 대시보드 API
- invoices: 세금계산서
- purchases: 매입 계산서
- store: 온라인 스토어
- ledger: 복식부기 API
"""
