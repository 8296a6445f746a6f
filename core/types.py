"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TransactionKind(str, Enum):
    """거래 유형 (잔고 부호 결정)"""

    INCOME = "income"
    EXPENSE = "expense"


class CategoryType(str, Enum):
    """카테고리 유형"""

    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, Enum):
    """계좌 유형"""

    CHECKING = "checking"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    CASH = "cash"
    CREDIT = "credit"
    OTHER = "other"


class GoalStatus(str, Enum):
    """재무 목표 상태"""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BudgetEntityType(str, Enum):
    """예산 대상 유형 (프론트엔드 호환)

    현재 budgets 테이블은 category만 저장.
    """

    CATEGORY = "category"
    SOURCE = "source"


class LedgerOperation(str, Enum):
    """Ledger 라이프사이클 작업"""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
