"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths


@dataclass(frozen=True)
class MailConfig:
    """SMTP 메일 설정 (비밀번호 재설정 메일 발송용)"""

    host: str
    port: int
    username: str
    password: str
    sender: str
    use_tls: bool = True


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path
    jwt_secret: str
    token_expire_days: int = Defaults.TOKEN_EXPIRE_DAYS
    reset_token_ttl_minutes: int = Defaults.RESET_TOKEN_TTL_MINUTES
    base_currency: str = Defaults.BASE_CURRENCY
    reset_url: str = ""
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    mail: MailConfig | None = None


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _load_mail_config(data: dict) -> MailConfig | None:
    """mail 섹션 파싱 (없으면 None → Mock 메일러 사용)"""
    mail = data.get("mail")
    if not mail:
        return None

    host = mail.get("host")
    sender = mail.get("sender") or mail.get("username")
    if not host or not sender:
        raise SettingsLoadError(
            "settings.yaml의 mail 섹션에 'host'와 'sender'(또는 'username')가 필요합니다"
        )

    # Gmail 앱 비밀번호는 공백 포함 가능 → 제거
    password = str(mail.get("password", "")).replace(" ", "")

    return MailConfig(
        host=host,
        port=int(mail.get("port", 587)),
        username=mail.get("username", ""),
        password=password,
        sender=sender,
        use_tls=bool(mail.get("use_tls", True)),
    )


def load_app_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    # auth 검증
    auth_config = data.get("auth") or {}
    jwt_secret = auth_config.get("jwt_secret")
    if not jwt_secret:
        raise SettingsLoadError("settings.yaml의 auth 섹션에 'jwt_secret'가 없습니다")

    # DB 경로 (상대 경로는 프로젝트 루트 기준)
    database_config = data.get("database") or {}
    db_path = Path(database_config.get("path") or Paths.DEFAULT_DB)
    if str(db_path) != ":memory:" and not db_path.is_absolute():
        db_path = path.parent.parent / db_path

    app_config = data.get("app") or {}
    base_currency = str(app_config.get("base_currency", Defaults.BASE_CURRENCY)).upper()
    if len(base_currency) != 3:
        raise SettingsLoadError(
            f"유효하지 않은 base_currency입니다: '{base_currency}' (ISO 4217 3자리)"
        )

    web_config = data.get("web") or {}

    return AppConfig(
        db_path=db_path,
        jwt_secret=jwt_secret,
        token_expire_days=int(auth_config.get("token_expire_days", Defaults.TOKEN_EXPIRE_DAYS)),
        reset_token_ttl_minutes=int(
            auth_config.get("reset_token_ttl_minutes", Defaults.RESET_TOKEN_TTL_MINUTES)
        ),
        base_currency=base_currency,
        reset_url=app_config.get("reset_url", ""),
        web_host=web_config.get("host", Defaults.WEB_HOST),
        web_port=int(web_config.get("port", Defaults.WEB_PORT)),
        mail=_load_mail_config(data),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_app_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """로드된 설정 원본"""
        assert self._config is not None
        return self._config

    @property
    def db_path(self) -> Path:
        """SQLite DB 경로"""
        return self.config.db_path

    @property
    def jwt_secret(self) -> str:
        """JWT 서명 키"""
        return self.config.jwt_secret

    @property
    def token_expire_days(self) -> int:
        """액세스 토큰 유효 기간 (일)"""
        return self.config.token_expire_days

    @property
    def reset_token_ttl_minutes(self) -> int:
        """비밀번호 재설정 토큰 유효 기간 (분)"""
        return self.config.reset_token_ttl_minutes

    @property
    def base_currency(self) -> str:
        """기준 통화 (빈 대시보드 기본 버킷)"""
        return self.config.base_currency

    @property
    def reset_url(self) -> str:
        """비밀번호 재설정 페이지 URL"""
        return self.config.reset_url

    @property
    def mail(self) -> MailConfig | None:
        """SMTP 설정 (None이면 Mock 메일러)"""
        return self.config.mail

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
