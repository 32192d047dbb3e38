"""
FastAPI routers, one per resource.

Each module exposes an APIRouter that the matching app includes. The
service instance is looked up on ``request.app.state``.
"""
