"""Contract template, gating and PDF output."""

from __future__ import annotations

from datetime import date

import pytest

from pulse_desk.errors import ContractValidationError
from pulse_desk.schemas.contract import ContractData
from pulse_desk.services import contract_pdf
from pulse_desk.services.contract_pdf import render_contract_pdf
from pulse_desk.services.contract_svc import (
    apply_plan, check_required, contract_blocks, export_filename, send_for_signature,
)

ISSUED = date(2025, 1, 7)


class TestPlans:
    def test_plan_fills_empty_value(self):
        data = apply_plan(ContractData(client_name="Acme", plan="standard"))
        assert data.value == "1700"

    def test_plan_keeps_typed_value(self):
        data = apply_plan(ContractData(client_name="Acme", plan="premium", value="3000"))
        assert data.value == "3000"

    def test_unknown_plan_ignored(self):
        assert apply_plan(ContractData(plan="gold")).value == ""


class TestGate:
    def test_name_and_value_required(self):
        with pytest.raises(ContractValidationError):
            check_required(ContractData(client_name="Acme"))
        with pytest.raises(ContractValidationError):
            check_required(ContractData(value="1200"))
        check_required(ContractData(client_name="Acme", value="1200"))

    def test_export_blocked_without_value(self):
        with pytest.raises(ContractValidationError):
            render_contract_pdf(ContractData(client_name="Acme"), ISSUED)

    def test_send_for_signature_is_gated_stub(self):
        with pytest.raises(ContractValidationError):
            send_for_signature(ContractData(client_name="Acme"))
        message = send_for_signature(ContractData(client_name="Acme", value="1200"))
        assert "Acme" in message


class TestTemplate:
    def test_filename_replaces_whitespace_runs(self):
        assert export_filename("CMYK  Impressão Digital", ISSUED) == "Contrato_CMYK_Impressão_Digital_2025-01-07.pdf"

    def test_filename_replaces_path_separators(self):
        assert export_filename("Acme/Brasil \\ SP", ISSUED) == "Contrato_Acme_Brasil_SP_2025-01-07.pdf"

    def test_preview_uses_placeholders(self):
        blocks = contract_blocks(ContractData(), ISSUED, placeholders=True)
        text = " ".join(b.text for b in blocks)
        for marker in ("[NOME DO CLIENTE]", "[CNPJ]", "[ENDEREÇO]", "[VALOR]", "[DATA INÍCIO]", "[DATA TÉRMINO]"):
            assert marker in text

    def test_filled_template(self):
        data = ContractData(
            client_name="Acme", client_tax_id="11.222.333/0001-44", value="1700",
            start_date="2025-01-10", end_date="2025-03-10",
        )
        blocks = contract_blocks(data, ISSUED)
        headings = [b.heading for b in blocks if b.kind == "section"]
        assert headings == [
            "CONTRATADA:", "CONTRATANTE:",
            "CLÁUSULA 1 – DO OBJETO E VALORES",
            "CLÁUSULA 2 – DO PRAZO",
            "CLÁUSULA 3 – DO PAGAMENTO",
        ]
        assert blocks[0].kind == "title"
        assert "R$ 1700 (1700 reais)." in blocks[3].text
        assert "com início em 2025-01-10 e término em 2025-03-10." in blocks[4].text
        signature = blocks[-1]
        assert signature.kind == "signature"
        assert signature.lines[0].endswith("07/01/2025")
        assert signature.lines[5] == "Acme"

    def test_additional_terms_block_only_when_present(self):
        data = ContractData(client_name="Acme", value="1", additional_terms="Line one\nLine two")
        blocks = contract_blocks(data, ISSUED)
        assert blocks[-2].heading == "TERMOS ADICIONAIS:"
        assert blocks[-2].lines == ["Line one", "Line two"]


class TestPdf:
    def test_pdf_bytes(self):
        pdf = render_contract_pdf(ContractData(client_name="Acme", value="1700"), ISSUED)
        assert pdf.startswith(b"%PDF")

    def test_long_terms_start_new_pages(self, monkeypatch):
        pages = []
        real_cursor = contract_pdf._Cursor

        class RecordingCursor(real_cursor):
            def __init__(self, c):
                super().__init__(c)
                pages.append(self)

        monkeypatch.setattr(contract_pdf, "_Cursor", RecordingCursor)
        terms = "\n".join(f"Term {i}" for i in range(80))
        pdf = render_contract_pdf(
            ContractData(client_name="Acme", value="1700", additional_terms=terms), ISSUED
        )

        assert pdf.startswith(b"%PDF")
        assert pages[0].pages > 1
