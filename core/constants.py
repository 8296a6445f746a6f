"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → financeflow/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    BASE_CURRENCY: str = "BRL"
    ACCOUNT_TYPE: str = "checking"
    GOAL_STATUS: str = "in_progress"

    WEB_HOST: str = "0.0.0.0"
    WEB_PORT: int = 3001

    LOG_LEVEL: str = "INFO"

    TOKEN_EXPIRE_DAYS: int = 30
    RESET_TOKEN_TTL_MINUTES: int = 60
    JWT_ALGORITHM: str = "HS256"

    TREND_MONTHS: int = 6

    # 월 범위 계산에 다음 달 1일이 필요하므로 9999년 제외
    MIN_YEAR: int = 1
    MAX_YEAR: int = 9998


class Money:
    """금액 정밀도 상수

    DB 컬럼 정의 기준 (DECIMAL(15, 2), 환율 DECIMAL(10, 6))
    """

    CENT: Decimal = Decimal("0.01")
    RATE_STEP: Decimal = Decimal("0.000001")
    ZERO: Decimal = Decimal("0")
    HUNDRED: Decimal = Decimal("100")


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    API_LOGS_DIR: Path = LOGS_DIR / "api"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    DEFAULT_DB: Path = DATA_DIR / "financeflow.db"


# 신규 사용자 기본 카테고리 (name, type, color)
DEFAULT_CATEGORIES: list[tuple[str, str, str]] = [
    ("Salário", "income", "#10b981"),
    ("Freelance", "income", "#3b82f6"),
    ("Investimentos", "income", "#8b5cf6"),
    ("Alimentação", "expense", "#ef4444"),
    ("Transporte", "expense", "#f59e0b"),
    ("Moradia", "expense", "#8b5cf6"),
    ("Saúde", "expense", "#06b6d4"),
    ("Educação", "expense", "#3b82f6"),
    ("Lazer", "expense", "#ec4899"),
    ("Seguros", "expense", "#6366f1"),
    ("Outros", "expense", "#64748b"),
]

# 신규 사용자 기본 수입원 (name, description)
DEFAULT_INCOME_SOURCES: list[tuple[str, str]] = [
    ("Empresa Principal", "Salário mensal"),
    ("Freelance", "Trabalhos extras"),
    ("Investimentos", "Dividendos e rendimentos"),
]
