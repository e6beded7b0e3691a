# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI  import konsol
from Core import kekik_FastAPI, Request, JSONResponse
from time import time
import asyncio

TIMEOUT_SURESI = 30

@kekik_FastAPI.middleware("http")
async def istekten_once_sonra(request: Request, call_next):
    baslangic_zamani = time()

    fw_for    = request.headers.get("X-Forwarded-For")
    client_ip = fw_for.split(",")[0].strip() if fw_for else (request.client.host if request.client else "-")

    log_veri = {
        "method" : request.method,
        "url"    : str(request.url).rstrip("?").split("?")[0],
        "kod"    : None,
        "sure"   : None,
        "ip"     : client_ip,
    }

    try:
        response = await asyncio.wait_for(call_next(request), timeout=TIMEOUT_SURESI)
        log_veri["kod"] = response.status_code
    except asyncio.TimeoutError:
        log_veri["kod"] = 504
        response        = JSONResponse(status_code=504, content={"ups": "Zaman Aşımı.."})
        konsol.log(f"[red]⏱️ Timeout:[/] {request.url.path} - {TIMEOUT_SURESI}sn aşıldı")

    if request.url.path.endswith("/health"):
        return response

    log_veri["sure"] = round(time() - baslangic_zamani, 2)
    konsol.log(
        f"[bold blue]»[/] [bold turquoise2]{log_veri['url']}[/]\n"
        f"  [green]durum:[/] [bold green]{log_veri['method']}[/]"
        f" [blue]-[/] [bold bright_yellow]{log_veri['kod']}[/]"
        f" [blue]-[/] [bold yellow2]{log_veri['sure']} sn[/]"
        f" [blue]|[/] [bold red]{log_veri['ip']}[/]\n"
    )

    return response
