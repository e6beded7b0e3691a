# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from Core import Request, JSONResponse, HTTPException
from .    import api_v1_router

@api_v1_router.get("/rooms/{room_id}")
async def room_info(request: Request, room_id: str):
    """join_request öncesi odanın varlığını kontrol etmek için özet bilgi"""
    room = request.app.state.session_engine.registry.get(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Oda bulunamadı.")

    return JSONResponse({"success": True, **room.summary()})
