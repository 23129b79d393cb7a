"""Contract editor: preview, PDF export and send-for-signature stub."""

from __future__ import annotations

from datetime import date
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..backend.session import SessionContext
from ..deps import get_session_context
from ..errors import ContractValidationError
from ..navigation import page_context
from ..notifications import NOTICES, Notice
from ..schemas.contract import PLANS, ContractData
from ..services.contract_pdf import render_contract_pdf
from ..services.contract_svc import apply_plan, contract_blocks, export_filename, send_for_signature
from ..templating import templates

router = APIRouter(tags=["contracts"])


async def _read_contract(request: Request) -> ContractData:
    form = await request.form()
    data = ContractData.model_validate(
        {key: str(form.get(key, "")) for key in ContractData.model_fields}
    )
    return apply_plan(data)


def _render_editor(
    request: Request,
    ctx: SessionContext,
    data: ContractData,
    *,
    notice: Notice | None = None,
    status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "contracts/editor.html",
        page_context(
            request, ctx, "contracts",
            notice=notice,
            data=data,
            plans=PLANS,
            blocks=contract_blocks(data, date.today(), placeholders=True),
        ),
        status_code=status_code,
    )


def _content_disposition(filename: str) -> str:
    fallback = filename.encode("ascii", "ignore").decode("ascii")
    fallback = fallback.replace("\\", "").replace('"', "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/contracts")
async def contract_editor(request: Request, ctx: SessionContext = Depends(get_session_context)):
    return _render_editor(request, ctx, ContractData())


@router.post("/contracts/preview")
async def contract_preview(request: Request, ctx: SessionContext = Depends(get_session_context)):
    return _render_editor(request, ctx, await _read_contract(request))


@router.post("/contracts/export")
async def contract_export(request: Request, ctx: SessionContext = Depends(get_session_context)):
    data = await _read_contract(request)
    issued_on = date.today()
    try:
        pdf = render_contract_pdf(data, issued_on)
    except ContractValidationError:
        return _render_editor(
            request, ctx, data, notice=NOTICES["contract_invalid"], status_code=422
        )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": _content_disposition(
                export_filename(data.client_name, issued_on)
            )
        },
    )


@router.post("/contracts/send")
async def contract_send(request: Request, ctx: SessionContext = Depends(get_session_context)):
    data = await _read_contract(request)
    try:
        message = send_for_signature(data)
    except ContractValidationError:
        return _render_editor(
            request, ctx, data, notice=NOTICES["contract_invalid"], status_code=422
        )
    notice = Notice("contract_sent", "Sent for signature", message, "success")
    return _render_editor(request, ctx, data, notice=notice)
