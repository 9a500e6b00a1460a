from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Request
from fastapi.responses import JSONResponse

from cms.services.contact_service import ContactService

router = APIRouter(prefix="/api", tags=["contact"])
logger = logging.getLogger(__name__)


@router.post("/contact")
def submit_contact(request: Request, background_tasks: BackgroundTasks, payload: Optional[dict] = Body(None)):
    service: ContactService = request.app.state.contact_service
    try:
        record = service.submit(payload or {})
    except Exception:
        logger.exception("Contact submission failed")
        return JSONResponse({"success": False, "message": "Submission failed"}, status_code=500)
    background_tasks.add_task(service.notify, record)
    return {"success": True, "message": "Message received"}
