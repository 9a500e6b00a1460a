"""
FastAPI routers grouped by concern (resources, contact, auth, pages).

Each module exposes an APIRouter included by cms.app.create_app. Services are
built once per app and read from request.app.state.
"""
