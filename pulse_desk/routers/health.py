"""Health and readiness checks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..backend.base import TableStore
from ..deps import get_store
from ..errors import StorageError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "pulse-desk"}


@router.get("/ready")
async def readiness_check(store: TableStore = Depends(get_store)):
    try:
        await store.count("clients")
    except StorageError:
        logger.warning("Readiness check failed", exc_info=True)
        return JSONResponse(
            {"status": "unavailable", "service": "pulse-desk"}, status_code=503
        )
    return {"status": "ready", "service": "pulse-desk"}
