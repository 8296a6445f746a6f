"""
도메인 예외 정의

Web 계층에서 HTTP 상태 코드로 변환됨:
- ValidationError → 400
- AuthError → 401
- NotFoundError → 404 (존재하지 않음 / 타 사용자 소유 구분 없음)
- StoreError → 500 (원자 단위 실패, 전체 롤백 후 발생)
"""


class FinanceFlowError(Exception):
    """도메인 예외 기본 클래스"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FinanceFlowError):
    """요청 값 검증 실패"""

    status_code = 400


class AuthError(FinanceFlowError):
    """인증 실패 (토큰 없음/무효/만료)"""

    status_code = 401


class NotFoundError(FinanceFlowError):
    """대상 없음

    id가 없거나 다른 사용자 소유인 경우 모두 동일하게 발생.
    """

    status_code = 404

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class StoreError(FinanceFlowError):
    """저장소 실패 (원자 단위 롤백 완료 후 발생)"""

    status_code = 500
