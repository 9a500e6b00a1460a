from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from cms.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
def login(request: Request, payload: Optional[dict] = Body(None)):
    auth_service: AuthService = request.app.state.auth_service
    data = payload or {}
    if auth_service.login(data.get("username"), data.get("password")):
        return {"success": True}
    return JSONResponse({"success": False, "message": "Invalid credentials"}, status_code=401)
