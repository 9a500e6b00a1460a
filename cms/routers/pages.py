"""Page routes for the public site and admin panel, plus the client-side routing fallback."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse, Response

router = APIRouter(prefix="", tags=["pages"])

PAGES = {
    "": "index.html",
    "services": "services.html",
    "blog": "blog.html",
    "admin": "admin.html",
}
FALLBACK_PAGE = "index.html"


def _public_dir(request: Request) -> Path:
    return Path(request.app.state.public_dir)


def _send_file(base: Path, name: str) -> Response:
    target = (base / name).resolve()
    if base.resolve() not in target.parents or not target.is_file():
        return Response(status_code=404)
    return FileResponse(target)


@router.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def api_not_found(path: str):
    return JSONResponse({"error": "Not found"}, status_code=404)


@router.get("/{path:path}", include_in_schema=False)
def page(request: Request, path: str):
    base = _public_dir(request)
    clean = path.strip("/")
    if clean in PAGES:
        return _send_file(base, PAGES[clean])
    # Existing assets (css, js, images) are served as-is.
    asset = (base / clean).resolve()
    if clean and base.resolve() in asset.parents and asset.is_file():
        return FileResponse(asset)
    return _send_file(base, FALLBACK_PAGE)
