"""Navigation, panels, contracts and health routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from pulse_desk.schemas.client import ClientCreate
from pulse_desk.services.client_repo import ClientRepository

from .conftest import VALID_CLIENT_FORM


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready_endpoint(client: AsyncClient):
    resp = await client.get("/ready")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"


@pytest.mark.asyncio
@pytest.mark.parametrize("tab,target", [
    (None, "/dashboard"),
    ("tasks", "/tasks"),
    ("crm", "/crm"),
    ("contracts", "/contracts"),
    ("reports", "/reports"),
    ("nonsense", "/dashboard"),
])
async def test_home_redirects_to_tab(client: AsyncClient, tab, target):
    params = {"tab": tab} if tab else {}
    resp = await client.get("/", params=params)
    assert resp.status_code == 303
    assert resp.headers["location"] == target


@pytest.mark.asyncio
async def test_dashboard(client: AsyncClient, sql_store):
    await ClientRepository(sql_store).create(ClientCreate.model_validate(VALID_CLIENT_FORM))

    resp = await client.get("/dashboard")

    assert resp.status_code == 200
    assert "Maria Santos" in resp.text
    assert "New client added: Maria Santos" in resp.text
    assert "card-placeholder" in resp.text


@pytest.mark.asyncio
async def test_task_board(client: AsyncClient):
    resp = await client.get("/tasks")
    assert resp.status_code == 200
    for status in ("ready", "working", "done", "stuck"):
        assert f'data-status="{status}"' in resp.text
    assert "Q4 performance analysis" in resp.text


@pytest.mark.asyncio
async def test_reports(client: AsyncClient):
    resp = await client.get("/reports")
    assert resp.status_code == 200
    assert "Detailed report" in resp.text


class TestContracts:
    @pytest.mark.asyncio
    async def test_editor_shows_placeholders(self, client: AsyncClient):
        resp = await client.get("/contracts")
        assert resp.status_code == 200
        assert "[NOME DO CLIENTE]" in resp.text

    @pytest.mark.asyncio
    async def test_preview_applies_plan(self, client: AsyncClient):
        resp = await client.post("/contracts/preview", data={"client_name": "Acme", "plan": "standard"})
        assert resp.status_code == 200
        assert 'name="value" value="1700"' in resp.text
        assert "R$ 1700 (1700 reais)" in resp.text

    @pytest.mark.asyncio
    async def test_export_pdf(self, client: AsyncClient):
        resp = await client.post("/contracts/export", data={"client_name": "Acme Corp", "value": "2500"})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert 'filename="Contrato_Acme_Corp_' in resp.headers["content-disposition"]
        assert resp.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_export_filename_fallback_drops_quotes(self, client: AsyncClient):
        resp = await client.post("/contracts/export", data={"client_name": 'Acme "X" Ltda', "value": "2500"})
        assert resp.status_code == 200
        disposition = resp.headers["content-disposition"]
        assert 'filename="Contrato_Acme_X_Ltda_' in disposition
        assert disposition.count('"') == 2

    @pytest.mark.asyncio
    async def test_export_blocked_without_value(self, client: AsyncClient):
        resp = await client.post("/contracts/export", data={"client_name": "Acme"})
        assert resp.status_code == 422
        assert resp.headers["content-type"].startswith("text/html")
        assert 'data-notice="contract_invalid"' in resp.text

    @pytest.mark.asyncio
    async def test_send_for_signature(self, client: AsyncClient):
        resp = await client.post("/contracts/send", data={"client_name": "Acme", "value": "1200"})
        assert resp.status_code == 200
        assert 'data-notice="contract_sent"' in resp.text

        resp = await client.post("/contracts/send", data={"value": "1200"})
        assert resp.status_code == 422
