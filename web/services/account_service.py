"""
계좌 서비스

계좌 CRUD. 잔고는 생성 시 개설 잔고만 지정 가능.
"""

import logging
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.errors import NotFoundError
from core.ledger.store import LedgerStore

logger = logging.getLogger(__name__)


class AccountService:
    """계좌 서비스

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.store = LedgerStore(db)

    async def list_accounts(self, user_id: int) -> list[dict[str, Any]]:
        """계좌 목록"""
        return await self.store.get_accounts_by_user(user_id)

    async def create_account(
        self,
        user_id: int,
        name: str,
        currency: str,
        account_type: str = Defaults.ACCOUNT_TYPE,
        balance: Decimal | None = None,
        is_emergency_fund: bool = False,
    ) -> dict[str, Any]:
        """계좌 생성"""
        async with self.db.transaction():
            account = await self.store.create_account(
                user_id,
                name=name,
                currency=currency,
                account_type=account_type,
                balance=balance,
                is_emergency_fund=is_emergency_fund,
            )

        logger.info(
            f"계좌 생성: id={account['id']} {name} ({currency})",
            extra={"user_id": user_id, "account_id": account["id"]},
        )
        return account

    async def update_account(
        self,
        account_id: int,
        user_id: int,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        """계좌 속성 수정 (잔고 제외)"""
        async with self.db.transaction():
            return await self.store.update_account(account_id, user_id, fields)

    async def delete_account(self, account_id: int, user_id: int) -> None:
        """계좌 삭제 (연결 거래/환전 함께 삭제)

        Raises:
            NotFoundError: 계좌가 없거나 다른 사용자 소유
        """
        async with self.db.transaction():
            deleted = await self.store.delete_account(account_id, user_id)
            if not deleted:
                raise NotFoundError("Account")

        logger.info(
            f"계좌 삭제: id={account_id}",
            extra={"user_id": user_id, "account_id": account_id},
        )
