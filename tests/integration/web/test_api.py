"""HTTP API 통합 테스트

httpx ASGITransport로 앱을 직접 호출 (lifespan 미실행, 스키마는 db fixture가 생성)
"""

import httpx
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.mock.mailer import MockMailer
from core.config.loader import Settings
from web.app import app
from web.dependencies import get_app_settings, get_mailer


@pytest.fixture
def mailer() -> MockMailer:
    return MockMailer()


@pytest_asyncio.fixture
async def client(db: SQLiteAdapter, settings: Settings, mailer: MockMailer) -> httpx.AsyncClient:
    """설정/메일러를 교체한 테스트 클라이언트"""
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_mailer] = lambda: mailer

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _register(client: httpx.AsyncClient, email: str = "ana@example.com") -> dict[str, str]:
    response = await client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": email, "password": "s3nha"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def auth(client: httpx.AsyncClient) -> dict[str, str]:
    """인증 헤더"""
    return await _register(client)


async def _create_account(
    client: httpx.AsyncClient,
    auth: dict[str, str],
    name: str = "Nubank",
    currency: str = "BRL",
    balance: str = "1000",
    **extra,
) -> dict:
    response = await client.post(
        "/api/accounts",
        headers=auth,
        json={"name": name, "currency": currency, "balance": balance, **extra},
    )
    assert response.status_code == 201
    return response.json()


async def _account_balance(client: httpx.AsyncClient, auth: dict[str, str], account_id: int) -> str:
    response = await client.get("/api/accounts", headers=auth)
    return next(a["balance"] for a in response.json() if a["id"] == account_id)


class TestHealthAndErrors:
    """헬스 체크 및 오류 응답 형식 테스트"""

    @pytest.mark.asyncio
    async def test_health(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_missing_token(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts")

        assert response.status_code == 401
        assert response.json() == {"error": "Token não fornecido"}

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/accounts", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Token inválido"}

    @pytest.mark.asyncio
    async def test_validation_error_shape(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        response = await client.post("/api/transactions", headers=auth, json={"type": "expense"})

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_out_of_range_amounts(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        """정밀도 초과 금액은 500이 아닌 400"""
        response = await client.post(
            "/api/accounts", headers=auth, json={"name": "Nubank", "currency": "BRL", "balance": "1e40"}
        )
        assert response.status_code == 400
        assert "balance" in response.json()["error"]

        account = await _create_account(client, auth)
        response = await client.post(
            "/api/transactions",
            headers=auth,
            json={"accountId": account["id"], "type": "expense", "amount": "1e30", "date": "2026-01-15"},
        )
        assert response.status_code == 400
        assert await _account_balance(client, auth, account["id"]) == "1000.00"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("year", [-5, 0, 10000])
    async def test_out_of_range_report_year(
        self, client: httpx.AsyncClient, auth: dict[str, str], year: int
    ) -> None:
        response = await client.get(
            "/api/reports/category-breakdown", headers=auth, params={"month": 1, "year": year}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/nope")

        assert response.status_code == 404
        assert "error" in response.json()


class TestAuthApi:
    """Auth API 테스트"""

    @pytest.mark.asyncio
    async def test_register_and_login(self, client: httpx.AsyncClient) -> None:
        await _register(client)

        response = await client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "s3nha"}
        )

        assert response.status_code == 200
        assert response.json()["user"] == {"id": 1, "name": "Ana", "email": "ana@example.com"}

    @pytest.mark.asyncio
    async def test_duplicate_register(self, client: httpx.AsyncClient) -> None:
        await _register(client)

        response = await client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "x"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Email já cadastrado"}

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: httpx.AsyncClient) -> None:
        await _register(client)

        response = await client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "errada"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_password_reset_flow(self, client: httpx.AsyncClient, mailer: MockMailer) -> None:
        await _register(client)

        response = await client.post("/api/auth/forgot-password", json={"email": "ana@example.com"})
        assert response.status_code == 200
        token = mailer.last_mail.token

        response = await client.post(
            "/api/auth/reset-password", json={"token": token, "newPassword": "nova"}
        )
        assert response.status_code == 200

        response = await client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "nova"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_reset_with_bad_token(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/auth/reset-password", json={"token": "nope", "newPassword": "nova"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Token inválido ou expirado"}


class TestAccountsAndTransactions:
    """계좌/거래/환전 API 테스트"""

    @pytest.mark.asyncio
    async def test_account_crud(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        account = await _create_account(client, auth, currency="usd", isEmergencyFund=True)

        assert account["currency"] == "USD"
        assert account["balance"] == "1000.00"
        assert account["isEmergencyFund"] is True
        assert account["type"] == "checking"

        response = await client.put(
            f"/api/accounts/{account['id']}", headers=auth, json={"name": "Wise", "balance": "5"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Wise"
        assert response.json()["balance"] == "1000.00"

        response = await client.delete(f"/api/accounts/{account['id']}", headers=auth)
        assert response.json() == {"message": "Conta deletada com sucesso"}

        response = await client.delete(f"/api/accounts/{account['id']}", headers=auth)
        assert response.status_code == 404
        assert response.json() == {"error": "Account not found"}

    @pytest.mark.asyncio
    async def test_transaction_updates_balance(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        account = await _create_account(client, auth)

        response = await client.post(
            "/api/transactions",
            headers=auth,
            json={"accountId": account["id"], "type": "expense", "amount": "120.50", "date": "2026-01-15"},
        )
        assert response.status_code == 201
        transaction = response.json()
        assert transaction["amount"] == "120.50"
        assert transaction["accountId"] == account["id"]
        assert await _account_balance(client, auth, account["id"]) == "879.50"

        response = await client.put(
            f"/api/transactions/{transaction['id']}",
            headers=auth,
            json={"accountId": account["id"], "type": "income", "amount": 100, "date": "2026-01-15"},
        )
        assert response.status_code == 200
        assert await _account_balance(client, auth, account["id"]) == "1100.00"

        response = await client.get("/api/transactions", headers=auth, params={"accountId": account["id"]})
        assert [t["id"] for t in response.json()] == [transaction["id"]]

        response = await client.delete(f"/api/transactions/{transaction['id']}", headers=auth)
        assert response.status_code == 200
        assert await _account_balance(client, auth, account["id"]) == "1000.00"

    @pytest.mark.asyncio
    async def test_transaction_pagination(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        account = await _create_account(client, auth)
        for day in ("2026-01-01", "2026-01-02", "2026-01-03"):
            await client.post(
                "/api/transactions",
                headers=auth,
                json={"accountId": account["id"], "type": "expense", "amount": "1", "date": day},
            )

        response = await client.get("/api/transactions", headers=auth, params={"limit": 2, "offset": 1})

        assert [t["date"] for t in response.json()] == ["2026-01-02", "2026-01-01"]

    @pytest.mark.asyncio
    async def test_exchange_defaults(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        brl = await _create_account(client, auth)
        usd = await _create_account(client, auth, name="Wise", currency="USD", balance="0")

        response = await client.post(
            "/api/exchanges",
            headers=auth,
            json={
                "fromAccountId": brl["id"],
                "toAccountId": usd["id"],
                "fromAmount": "540",
                "toAmount": "100",
                "date": "2026-01-10",
            },
        )

        assert response.status_code == 201
        exchange = response.json()
        assert exchange["fromCurrency"] == "BRL"
        assert exchange["toCurrency"] == "USD"
        assert exchange["exchangeRate"] == "0.185185"
        assert await _account_balance(client, auth, brl["id"]) == "460.00"
        assert await _account_balance(client, auth, usd["id"]) == "100.00"

        response = await client.delete(f"/api/exchanges/{exchange['id']}", headers=auth)
        assert response.status_code == 200
        assert await _account_balance(client, auth, brl["id"]) == "1000.00"

    @pytest.mark.asyncio
    async def test_other_user_cannot_touch(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        account = await _create_account(client, auth)
        other = await _register(client, email="bruno@example.com")

        response = await client.post(
            "/api/transactions",
            headers=other,
            json={"accountId": account["id"], "type": "expense", "amount": "10", "date": "2026-01-15"},
        )
        assert response.status_code == 404

        response = await client.delete(f"/api/accounts/{account['id']}", headers=other)
        assert response.status_code == 404

        response = await client.get("/api/accounts", headers=other)
        assert response.json() == []
        assert await _account_balance(client, auth, account["id"]) == "1000.00"


class TestCatalogAndBudgets:
    """카테고리/예산 API 테스트"""

    @pytest.mark.asyncio
    async def test_default_categories(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        response = await client.get("/api/categories", headers=auth)

        names = {c["name"] for c in response.json()}
        assert {"Salário", "Alimentação", "Outros"} <= names

        response = await client.get("/api/income-sources", headers=auth)
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_budget_upsert(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        response = await client.post(
            "/api/categories", headers=auth, json={"name": "Pets", "type": "expense", "color": "#000000"}
        )
        category_id = response.json()["id"]

        first = await client.post(
            "/api/budgets",
            headers=auth,
            json={"entityId": category_id, "entityType": "category", "amount": "300", "month": "2026-04"},
        )
        second = await client.post(
            "/api/budgets",
            headers=auth,
            json={"categoryId": category_id, "limitAmount": "450", "month": 4, "year": 2026},
        )

        assert first.status_code == 201
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["limitAmount"] == "450.00"
        assert second.json()["currency"] == "BRL"

        response = await client.get("/api/budgets", headers=auth, params={"month": 4, "year": 2026})
        assert len(response.json()) == 1

        response = await client.put(
            f"/api/budgets/{first.json()['id']}", headers=auth, json={"limitAmount": "500"}
        )
        assert response.json()["limitAmount"] == "500.00"

    @pytest.mark.asyncio
    async def test_budget_requires_category(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        response = await client.post("/api/budgets", headers=auth, json={"limitAmount": "10"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("period", [{"month": 0, "year": 2026}, {"month": 4, "year": 0}])
    async def test_budget_zero_period_rejected(
        self, client: httpx.AsyncClient, auth: dict[str, str], period: dict[str, int]
    ) -> None:
        """0은 기본값(이번 달/올해)으로 대체되지 않음"""
        response = await client.get("/api/categories", headers=auth)
        category_id = response.json()[0]["id"]

        response = await client.post(
            "/api/budgets", headers=auth, json={"categoryId": category_id, "limitAmount": "10", **period}
        )

        assert response.status_code == 400
        response = await client.get("/api/budgets", headers=auth)
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_budget_foreign_category(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        other = await _register(client, email="bruno@example.com")
        response = await client.get("/api/categories", headers=other)
        foreign_id = response.json()[0]["id"]

        response = await client.post(
            "/api/budgets", headers=auth, json={"categoryId": foreign_id, "limitAmount": "10"}
        )

        assert response.status_code == 404


class TestHoldingsAndMetrics:
    """보유 자산/대시보드 API 테스트"""

    @pytest.mark.asyncio
    async def test_holdings_crud(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        response = await client.post(
            "/api/goals", headers=auth, json={"name": "Viagem", "targetAmount": "8000"}
        )
        assert response.status_code == 201
        goal = response.json()
        assert goal["currency"] == "BRL"
        assert goal["status"] == "in_progress"

        response = await client.put(
            f"/api/goals/{goal['id']}", headers=auth, json={"currentAmount": "1000", "status": "completed"}
        )
        assert response.json()["currentAmount"] == "1000.00"
        assert response.json()["status"] == "completed"

        response = await client.post(
            "/api/investments",
            headers=auth,
            json={
                "name": "PETR4",
                "type": "stocks",
                "amount": "1000",
                "currency": "BRL",
                "purchaseDate": "2025-08-01",
            },
        )
        assert response.json()["currentValue"] == "1000.00"

        response = await client.get("/api/investments/allocation", headers=auth)
        assert response.json() == [{"type": "stocks", "currency": "BRL", "total": "1000.00"}]

        response = await client.post(
            "/api/assets",
            headers=auth,
            json={"name": "Carro", "category": "vehicle", "value": "30000", "currency": "BRL"},
        )
        asset = response.json()
        assert asset["category"] == "vehicle"

        response = await client.post(
            "/api/liabilities",
            headers=auth,
            json={"name": "Financiamento", "category": "loan", "amount": "12000", "currency": "BRL"},
        )
        liability = response.json()
        assert liability["category"] == "loan"

        response = await client.delete(f"/api/assets/{asset['id']}", headers=auth)
        assert response.status_code == 200
        response = await client.delete(f"/api/assets/{asset['id']}", headers=auth)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_dashboard(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        response = await client.get("/api/metrics/dashboard", headers=auth)
        assert response.json()["BRL"]["netWorth"] == "0.00"

        await _create_account(client, auth, balance="2000", isEmergencyFund=True)
        await client.post(
            "/api/liabilities",
            headers=auth,
            json={"name": "Cartão", "amount": "500", "currency": "BRL"},
        )

        response = await client.get("/api/metrics/dashboard", headers=auth)

        brl = response.json()["BRL"]
        assert brl["totalAssets"] == "2000.00"
        assert brl["netWorth"] == "1500.00"
        assert brl["debtRatio"] == "25.00"
        assert brl["emergencyFundValue"] == "2000.00"
        assert set(brl["monthly"]) == {"income", "expenses", "balance", "savingsRate"}

    @pytest.mark.asyncio
    async def test_reports(self, client: httpx.AsyncClient, auth: dict[str, str]) -> None:
        account = await _create_account(client, auth)
        await client.post(
            "/api/transactions",
            headers=auth,
            json={"accountId": account["id"], "type": "expense", "amount": "50", "date": "2026-02-10"},
        )

        response = await client.get(
            "/api/reports/category-breakdown",
            headers=auth,
            params={"month": 2, "year": 2026, "type": "expense"},
        )
        assert response.status_code == 200
        assert response.json() == [{"name": None, "color": None, "currency": "BRL", "total": "50.00"}]

        response = await client.get("/api/reports/monthly-trend", headers=auth, params={"months": 0})
        assert response.status_code == 400
