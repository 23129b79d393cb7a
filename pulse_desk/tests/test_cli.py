"""CLI command tests."""

from __future__ import annotations

import asyncio

from typer.testing import CliRunner

from pulse_desk.cli import app
from pulse_desk.schemas.client import ClientCreate
from pulse_desk.services.client_repo import ClientRepository

from .conftest import FakeTableStore, VALID_CLIENT_FORM

runner = CliRunner()


def _seeded_store() -> FakeTableStore:
    store = FakeTableStore()
    repo = ClientRepository(store)
    for name in ("CMYK Impressão Digital", "João Silva"):
        asyncio.run(repo.create(ClientCreate.model_validate({**VALID_CLIENT_FORM, "name": name})))
    return store


class TestContractCommand:
    def test_writes_pdf(self, tmp_path):
        result = runner.invoke(app, [
            "contract", "--client", "Acme Corp", "--plan", "basic", "--output", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        files = list(tmp_path.glob("Contrato_Acme_Corp_*.pdf"))
        assert len(files) == 1
        assert files[0].read_bytes().startswith(b"%PDF")

    def test_slash_in_client_name_stays_in_output_dir(self, tmp_path):
        result = runner.invoke(app, [
            "contract", "--client", "Acme/Brasil", "--value", "100", "--output", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        files = list(tmp_path.iterdir())
        assert len(files) == 1
        assert files[0].name.startswith("Contrato_Acme_Brasil_")

    def test_missing_value_fails(self, tmp_path):
        result = runner.invoke(app, ["contract", "--client", "Acme", "--output", str(tmp_path)])
        assert result.exit_code == 1
        assert list(tmp_path.iterdir()) == []


class TestClientsCommand:
    def test_lists_clients(self, monkeypatch):
        store = _seeded_store()
        monkeypatch.setattr("pulse_desk.cli.get_store", lambda: store)

        result = runner.invoke(app, ["clients", "--search", "cmyk", "--json"])

        assert result.exit_code == 0, result.output
        assert "CMYK Impressão Digital" in result.output
        assert "João Silva" not in result.output

    def test_storage_error_exits(self, monkeypatch):
        store = FakeTableStore()
        store.fail_on.add(("select", "clients"))
        monkeypatch.setattr("pulse_desk.cli.get_store", lambda: store)

        result = runner.invoke(app, ["clients"])
        assert result.exit_code == 1
