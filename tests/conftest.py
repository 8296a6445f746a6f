"""
pytest 공통 fixture 정의

임시 DB / 설정 파일 / 사용자 fixture
"""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.auth.passwords import hash_password
from core.config.loader import Settings
from core.storage.user_store import UserStore

TEST_JWT_SECRET = "test_jwt_secret_key_xyz"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (DB는 임시 디렉토리)"""
    db_path = (temp_dir / "financeflow.db").as_posix()
    content = f"""# 테스트용 settings.yaml
auth:
  jwt_secret: "{TEST_JWT_SECRET}"
  token_expire_days: 7
  reset_token_ttl_minutes: 30

database:
  path: "{db_path}"

app:
  base_currency: brl
  reset_url: "http://localhost:5173/reset-password"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(content, encoding="utf-8")
    return settings_path


@pytest.fixture
def settings(temp_settings_file: Path) -> Settings:
    """임시 설정 파일로 로드한 Settings (싱글턴 초기화)"""
    Settings.reset()
    yield Settings(temp_settings_file)
    Settings.reset()


@pytest_asyncio.fixture
async def db(temp_dir: Path) -> SQLiteAdapter:
    """스키마가 초기화된 임시 DB"""
    adapter = SQLiteAdapter(temp_dir / "financeflow.db")
    await adapter.connect()
    await init_schema(adapter)

    yield adapter

    await adapter.close()


async def _create_user(db: SQLiteAdapter, name: str, email: str) -> int:
    users = UserStore(db)
    async with db.transaction():
        user = await users.create_user(name, email, hash_password("secret", rounds=4))
    return user["id"]


@pytest_asyncio.fixture
async def user_id(db: SQLiteAdapter) -> int:
    """테스트 사용자"""
    return await _create_user(db, "Ana", "ana@example.com")


@pytest_asyncio.fixture
async def other_user_id(db: SQLiteAdapter) -> int:
    """다른 사용자 (소유권 검증용)"""
    return await _create_user(db, "Bruno", "bruno@example.com")
