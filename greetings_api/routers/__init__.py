"""
FastAPI routers grouped by resource.

Each module exposes an APIRouter included by the application factory in
``greetings_api.app``.
"""
