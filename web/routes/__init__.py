"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- auth: 회원가입/로그인/비밀번호 재설정
- accounts: 계좌
- categories: 카테고리, 수입원
- transactions: 거래, 환전
- budgets: 예산
- holdings: 재무 목표, 투자, 자산, 부채
- metrics: 대시보드, 리포트
"""
