# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from Core import Request, JSONResponse
from .    import api_v1_router

@api_v1_router.get("/health")
async def health_check(request: Request):
    """API sağlık kontrolü"""
    registry = request.app.state.session_engine.registry
    return JSONResponse({"success": True, "status": "healthy", "rooms": len(registry)})
