"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- auth: 가입/로그인/토큰 갱신
- users: 프로필/환경설정
- accounts: 계좌
- transactions: 거래 내역 (CSV 내보내기 포함)
- categories: 카테고리
- reminders: 리마인더
- investments: 투자
- loans: 대출
- dashboard: 대시보드 API
"""
