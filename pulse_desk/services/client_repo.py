"""Client repository - CRUD over the `clients` table plus audit entries.

UI code works with English field names (``ClientCreate`` / ``Client``); the
storage table keeps its own column names. ``FIELD_MAP`` is the single place
that translates between the two.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from ..backend.base import TableStore
from ..errors import ClientNotFound, StorageError
from ..schemas.client import Client, ClientCreate, ClientStatus
from .activity_log import ActivityLog

logger = logging.getLogger(__name__)

TABLE = "clients"
COPY_MARKER = " (copy)"

# UI name -> storage column
FIELD_MAP: dict[str, str] = {
    "name": "nome_razao",
    "tax_id": "cpf_cnpj",
    "street": "endereco",
    "city": "cidade",
    "state": "estado",
    "country": "pais",
    "postal_code": "cep",
    "mobile": "celular",
    "landline": "telefone_fixo",
    "whatsapp": "whatsapp",
    "email": "email",
    "linkedin": "linkedin",
    "instagram": "instagram",
    "job_title": "cargo",
    "company": "empresa",
    "sector": "setor_atuacao",
    "company_size": "tamanho_empresa",
    "lead_source": "origem_lead",
    "interaction_history": "interacoes_anteriores",
}

# Columns whose names are shared by both sides
PASSTHROUGH = ("id", "status", "value", "last_contact", "created_at", "updated_at")


def to_storage(fields: dict[str, Any]) -> dict[str, Any]:
    """Translate UI field names to storage columns, dropping unknown keys."""
    row: dict[str, Any] = {}
    for key, value in fields.items():
        if key in FIELD_MAP:
            row[FIELD_MAP[key]] = value
        elif key in PASSTHROUGH:
            row[key] = value
    return row


def from_storage(row: dict[str, Any]) -> Client:
    data: dict[str, Any] = {ui: row.get(col) for ui, col in FIELD_MAP.items()}
    for key in PASSTHROUGH:
        data[key] = row.get(key)
    try:
        return Client.model_validate(data)
    except ValidationError as e:
        raise StorageError(f"Malformed client row {row.get('id')!r}: {e}")


class ClientRepository:
    """Data access for clients.

    Mutations are followed by a best-effort activity entry: a failing audit
    insert is logged and never undoes or fails the client change.
    """

    def __init__(self, store: TableStore, activity_log: ActivityLog | None = None):
        self._store = store
        self._activities = activity_log or ActivityLog(store)

    async def list(self) -> list[Client]:
        rows = await self._store.select(TABLE, order_by="created_at", descending=True)
        return [from_storage(r) for r in rows]

    async def recent(self, limit: int = 3) -> list[Client]:
        rows = await self._store.select(
            TABLE, order_by="created_at", descending=True, limit=limit
        )
        return [from_storage(r) for r in rows]

    async def count(self) -> int:
        return await self._store.count(TABLE)

    async def get(self, client_id: str) -> Client | None:
        rows = await self._store.select(TABLE, filters={"id": client_id}, limit=1)
        return from_storage(rows[0]) if rows else None

    async def create(self, fields: ClientCreate, *, today: date | None = None) -> Client:
        """Insert a new lead and log ``client_added``."""
        row = to_storage(fields.model_dump(mode="json"))
        row.update(
            status=ClientStatus.lead.value,
            value=0,
            last_contact=(today or date.today()).isoformat(),
        )
        client = from_storage(await self._store.insert(TABLE, row))
        await self._log("client_added", client.id, f"New client added: {client.name}")
        return client

    async def delete(self, client_id: str) -> None:
        rows = await self._store.select(TABLE, filters={"id": client_id}, limit=1)
        name = rows[0].get("nome_razao") if rows else None

        removed = await self._store.delete(TABLE, filters={"id": client_id})
        if not removed:
            raise ClientNotFound(f"Client {client_id} not found", 404)
        await self._log("client_deleted", client_id, f"Client deleted: {name or client_id}")

    async def duplicate(self, client: Client) -> Client:
        """Copy every field except id/timestamps; the name gets a copy marker."""
        data = client.model_dump(
            mode="json", exclude={"id", "created_at", "updated_at"}
        )
        data["name"] = f"{client.name}{COPY_MARKER}"
        copy = from_storage(await self._store.insert(TABLE, to_storage(data)))
        await self._log("client_added", copy.id, f"Client duplicated: {copy.name}")
        return copy

    async def _log(self, type: str, client_id: str, description: str) -> None:
        try:
            await self._activities.record(type, "client", client_id, description)
        except (StorageError, ValidationError):
            logger.warning("Failed to record %s activity for %s", type, client_id, exc_info=True)
