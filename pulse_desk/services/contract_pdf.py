"""Contract PDF rendering with reportlab.

Text is placed at fixed positions measured from the top margin in
millimetres; lines are never wrapped, so long values can run past the
right edge.
"""

from __future__ import annotations

from datetime import date
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ..schemas.contract import ContractData
from .contract_svc import ContractBlock, check_required, contract_blocks

MARGIN = 20  # mm
TITLE_ADVANCE = 20
HEADING_ADVANCE = 8
LINE_ADVANCE = 6
BLOCK_ADVANCE = 15
SIGNATURE_GAP = 30
SIGNATURE_SPACING = 20


class _Cursor:
    """Vertical position in mm from the top edge, with page bookkeeping."""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.page_height_mm = A4[1] / mm
        self.y = MARGIN
        self.pages = 1

    def advance(self, amount: float) -> None:
        self.y += amount

    def draw(self, text: str, font: str = "Helvetica", size: int = 12) -> None:
        if self.y > self.page_height_mm - MARGIN:
            self.c.showPage()
            self.pages += 1
            self.y = MARGIN
        self.c.setFont(font, size)
        self.c.drawString(MARGIN * mm, (self.page_height_mm - self.y) * mm, text)


def _draw_signature(cur: _Cursor, block: ContractBlock) -> None:
    place_and_date, rule_a, contractor, contractor_id, rule_b, client, client_id = block.lines
    cur.advance(SIGNATURE_GAP)
    cur.draw(place_and_date)
    cur.advance(SIGNATURE_GAP)
    for i, line in enumerate((rule_a, contractor, contractor_id)):
        if i:
            cur.advance(LINE_ADVANCE)
        cur.draw(line)
    cur.advance(SIGNATURE_SPACING)
    for i, line in enumerate((rule_b, client, client_id)):
        if i:
            cur.advance(LINE_ADVANCE)
        cur.draw(line)


def render_contract_pdf(data: ContractData, issued_on: date | None = None) -> bytes:
    """Render the filled contract. Raises ContractValidationError if incomplete."""
    check_required(data)
    issued_on = issued_on or date.today()

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Contrato {data.client_name}")
    cur = _Cursor(c)

    for block in contract_blocks(data, issued_on):
        if block.kind == "title":
            cur.draw(block.lines[0], "Helvetica-Bold", 16)
            cur.advance(TITLE_ADVANCE)
        elif block.kind == "signature":
            _draw_signature(cur, block)
        else:
            cur.draw(block.heading or "", "Helvetica-Bold")
            cur.advance(HEADING_ADVANCE)
            for i, line in enumerate(block.lines):
                if i:
                    cur.advance(LINE_ADVANCE)
                cur.draw(line)
            cur.advance(BLOCK_ADVANCE)

    c.showPage()
    c.save()
    return buf.getvalue()
