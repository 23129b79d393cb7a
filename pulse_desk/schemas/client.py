"""Client schemas - UI-facing field names."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator


class ClientStatus(str, Enum):
    lead = "lead"
    prospect = "prospect"
    client = "client"
    inactive = "inactive"


STATUS_LABELS: dict[str, str] = {
    ClientStatus.lead.value: "Lead",
    ClientStatus.prospect.value: "Prospect",
    ClientStatus.client.value: "Client",
    ClientStatus.inactive.value: "Inactive",
}


class ClientFields(BaseModel):
    """Optional profile fields shared by the form and the stored record."""

    tax_id: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None

    mobile: str | None = None
    landline: str | None = None
    whatsapp: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    job_title: str | None = None
    company: str | None = None
    sector: str | None = None
    company_size: str | None = None

    lead_source: str | None = None
    interaction_history: str | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ClientCreate(ClientFields):
    """New-client form. Only the fields below are required."""

    name: str = Field(min_length=2)
    tax_id: str = Field(min_length=11)
    email: EmailStr
    sector: str = Field(min_length=2)
    lead_source: str = Field(min_length=2)


class Client(ClientFields):
    """A stored client record."""

    id: str
    name: str
    email: str | None = None
    status: ClientStatus = ClientStatus.lead
    value: float = Field(default=0.0, ge=0)
    last_contact: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value):
        return str(value) if value is not None else value

    @field_validator("value", mode="before")
    @classmethod
    def _value_default(cls, value):
        return 0.0 if value is None else value

    @property
    def company_display(self) -> str:
        return self.company or self.name

    @property
    def phone(self) -> str:
        return self.mobile or self.whatsapp or self.landline or ""

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status.value]
