"""Client model - column names follow the hosted `clients` table."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin, TimestampMixin


class Client(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "clients"

    nome_razao: Mapped[str] = mapped_column(String(255))
    cpf_cnpj: Mapped[str | None] = mapped_column(String(32), default=None)
    endereco: Mapped[str | None] = mapped_column(String(255), default=None)
    cidade: Mapped[str | None] = mapped_column(String(100), default=None)
    estado: Mapped[str | None] = mapped_column(String(50), default=None)
    pais: Mapped[str | None] = mapped_column(String(50), default=None)
    cep: Mapped[str | None] = mapped_column(String(20), default=None)

    celular: Mapped[str | None] = mapped_column(String(50), default=None)
    telefone_fixo: Mapped[str | None] = mapped_column(String(50), default=None)
    whatsapp: Mapped[str | None] = mapped_column(String(50), default=None)
    email: Mapped[str | None] = mapped_column(String(255), default=None, index=True)
    linkedin: Mapped[str | None] = mapped_column(String(255), default=None)
    instagram: Mapped[str | None] = mapped_column(String(255), default=None)

    cargo: Mapped[str | None] = mapped_column(String(100), default=None)
    empresa: Mapped[str | None] = mapped_column(String(200), default=None)
    setor_atuacao: Mapped[str | None] = mapped_column(String(100), default=None)
    tamanho_empresa: Mapped[str | None] = mapped_column(String(50), default=None)

    origem_lead: Mapped[str | None] = mapped_column(String(100), default=None)
    interacoes_anteriores: Mapped[str | None] = mapped_column(Text, default=None)

    status: Mapped[str] = mapped_column(String(20), default="lead")  # lead, prospect, client, inactive
    value: Mapped[float] = mapped_column(Float, default=0.0)
    last_contact: Mapped[date | None] = mapped_column(Date, default=None)

    def __repr__(self) -> str:
        return f"<Client {self.nome_razao!r}>"
