"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, 싱글턴 동작 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    AppConfig,
    MailConfig,
    Settings,
    SettingsLoadError,
    get_settings,
    load_app_config,
)
from core.constants import Defaults


def _write(temp_dir: Path, content: str) -> Path:
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadAppConfig:
    """load_app_config 테스트"""

    def test_load_valid(self, temp_settings_file: Path) -> None:
        """정상 로드"""
        config = load_app_config(temp_settings_file)

        assert isinstance(config, AppConfig)
        assert config.jwt_secret == "test_jwt_secret_key_xyz"
        assert config.token_expire_days == 7
        assert config.reset_token_ttl_minutes == 30
        assert config.base_currency == "BRL"
        assert config.mail is None

    def test_defaults(self, temp_dir: Path) -> None:
        """선택 항목 기본값"""
        path = _write(temp_dir, 'auth:\n  jwt_secret: "abc"\n')

        config = load_app_config(path)

        assert config.token_expire_days == Defaults.TOKEN_EXPIRE_DAYS
        assert config.base_currency == Defaults.BASE_CURRENCY
        assert config.web_port == Defaults.WEB_PORT

    def test_relative_db_path_resolved_from_root(self, temp_dir: Path) -> None:
        """상대 DB 경로는 config 디렉토리의 상위 기준"""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        path = config_dir / "settings.yaml"
        path.write_text('auth:\n  jwt_secret: "abc"\ndatabase:\n  path: data/app.db\n', encoding="utf-8")

        config = load_app_config(path)

        assert config.db_path == temp_dir / "data" / "app.db"

    def test_file_not_found(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="찾을 수 없습니다"):
            load_app_config(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir: Path) -> None:
        path = _write(temp_dir, "")
        with pytest.raises(SettingsLoadError, match="비어 있습니다"):
            load_app_config(path)

    def test_missing_jwt_secret(self, temp_dir: Path) -> None:
        path = _write(temp_dir, "auth: {}\n")
        with pytest.raises(SettingsLoadError, match="jwt_secret"):
            load_app_config(path)

    def test_invalid_base_currency(self, temp_dir: Path) -> None:
        path = _write(temp_dir, 'auth:\n  jwt_secret: "abc"\napp:\n  base_currency: EURO\n')
        with pytest.raises(SettingsLoadError, match="base_currency"):
            load_app_config(path)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        path = _write(temp_dir, "auth: [unclosed\n")
        with pytest.raises(SettingsLoadError, match="파싱 실패"):
            load_app_config(path)


class TestMailConfig:
    """mail 섹션 테스트"""

    def test_mail_section(self, temp_dir: Path) -> None:
        """앱 비밀번호 공백 제거, sender 기본값은 username"""
        path = _write(
            temp_dir,
            'auth:\n  jwt_secret: "abc"\n'
            "mail:\n"
            "  host: smtp.example.com\n"
            "  username: bot@example.com\n"
            '  password: "abcd efgh"\n',
        )

        config = load_app_config(path)

        assert isinstance(config.mail, MailConfig)
        assert config.mail.port == 587
        assert config.mail.password == "abcdefgh"
        assert config.mail.sender == "bot@example.com"
        assert config.mail.use_tls is True

    def test_mail_without_host(self, temp_dir: Path) -> None:
        path = _write(temp_dir, 'auth:\n  jwt_secret: "abc"\nmail:\n  username: a@b.com\n')
        with pytest.raises(SettingsLoadError, match="host"):
            load_app_config(path)


class TestSettings:
    """Settings 싱글턴 테스트"""

    def test_singleton(self, temp_settings_file: Path) -> None:
        Settings.reset()
        try:
            first = get_settings(temp_settings_file)
            second = get_settings()

            assert first is second
            assert second.jwt_secret == "test_jwt_secret_key_xyz"
        finally:
            Settings.reset()

    def test_properties(self, settings: Settings) -> None:
        assert settings.base_currency == "BRL"
        assert settings.reset_url == "http://localhost:5173/reset-password"
        assert settings.db_path.name == "financeflow.db"
        assert settings.mail is None

    def test_frozen_config(self, settings: Settings) -> None:
        with pytest.raises(AttributeError):
            settings.config.jwt_secret = "other"  # type: ignore
