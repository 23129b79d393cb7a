"""Contract template, plan pricing and export gating."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date

from ..config import settings
from ..errors import ContractValidationError
from ..schemas.contract import PLANS, ContractData

TITLE = "CONTRATO DE PRESTAÇÃO DE SERVIÇOS DE GESTÃO DE TRÁFEGO PAGO"
SIGNATURE_RULE = "_________________________________"
_FILENAME_UNSAFE = re.compile(r"[\s/\\]+")


@dataclass(frozen=True)
class ContractBlock:
    """One section of the contract.

    ``lines`` are the fixed line breaks used by the PDF; the preview joins
    them into a paragraph.
    """

    kind: str  # title | section | signature
    heading: str | None = None
    lines: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(line for line in self.lines if line)


def apply_plan(data: ContractData) -> ContractData:
    """Fill an empty value with the chosen plan's price."""
    plan = next((p for p in PLANS if p.value == data.plan), None)
    if plan is None or data.value:
        return data
    return data.model_copy(update={"value": str(plan.price)})


def check_required(data: ContractData) -> None:
    if not data.client_name or not data.value:
        raise ContractValidationError(
            "Fill in at least the client name and contract value", 422
        )


def export_filename(client_name: str, issued_on: date) -> str:
    """Whitespace runs and path separators in the name become ``_``."""
    return f"Contrato_{_FILENAME_UNSAFE.sub('_', client_name)}_{issued_on.isoformat()}.pdf"


def contract_blocks(
    data: ContractData,
    issued_on: date,
    *,
    placeholders: bool = False,
) -> list[ContractBlock]:
    """Fill the fixed template.

    With ``placeholders`` empty fields render as bracketed markers (preview);
    otherwise raw values are used as typed (PDF).
    """

    def val(value: str, marker: str) -> str:
        return value or (marker if placeholders else "")

    name = val(data.client_name, "[NOME DO CLIENTE]")
    tax_id = val(data.client_tax_id, "[CNPJ]")
    address = val(data.client_address, "[ENDEREÇO]")
    value = val(data.value, "[VALOR]")
    value_words = f"{data.value} reais" if data.value else val("", "[VALOR POR EXTENSO]")
    start = val(data.start_date, "[DATA INÍCIO]")
    end = val(data.end_date, "[DATA TÉRMINO]")

    blocks = [
        ContractBlock("title", lines=[TITLE]),
        ContractBlock("section", "CONTRATADA:", [
            f"{settings.contractor_name} inscrito no CNPJ sob o nº {settings.contractor_tax_id},",
            *settings.contractor_address,
        ]),
        ContractBlock("section", "CONTRATANTE:", [
            f"{name}, inscrita no CNPJ sob o nº {tax_id},",
            f"com endereço na {address}.",
        ]),
        ContractBlock("section", "CLÁUSULA 1 – DO OBJETO E VALORES", [
            "O presente contrato tem por objeto a prestação de serviços de gestão",
            "de tráfego pago em multiplataformas digitais. O valor acordado entre",
            f"as partes é de R$ {value} ({value_words}).",
        ]),
        ContractBlock("section", "CLÁUSULA 2 – DO PRAZO", [
            "O presente contrato terá duração de 60 (sessenta) dias corridos,",
            f"com início em {start} e término em {end}.",
        ]),
        ContractBlock("section", "CLÁUSULA 3 – DO PAGAMENTO", [
            "O pagamento será efetuado por meio de sistema automatizado de",
            "cobrança recorrente via plataforma Asaas.",
        ]),
    ]
    if data.additional_terms:
        blocks.append(ContractBlock(
            "section", "TERMOS ADICIONAIS:", data.additional_terms.splitlines()
        ))
    blocks.append(ContractBlock("signature", lines=[
        f"{settings.contractor_city}, {issued_on.strftime('%d/%m/%Y')}",
        SIGNATURE_RULE,
        settings.contractor_name,
        f"CNPJ: {settings.contractor_tax_id}",
        SIGNATURE_RULE,
        name,
        f"CNPJ: {tax_id}",
    ]))
    return blocks


def send_for_signature(data: ContractData) -> str:
    """No e-signature provider is integrated; only the gate is real."""
    check_required(data)
    return (
        f"Contract sent to {data.client_name}. "
        "Digital signature integration is not available yet."
    )
