"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y auth para todas las llamadas al registry.
- Elige el transporte (TCP o el socket unix del daemon local) en un solo sitio.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.domain.models import Session

# Host used for requests over a unix socket; the daemon ignores it.
_UDS_BASE_URL = "http://credctl.daemon"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    session: Session | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al daemon del registry.

    `transport` tiene prioridad sobre el socket configurado; los tests pasan
    aquí un `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if session is not None and session.token:
        headers["Authorization"] = f"Bearer {session.token}"
    if extra_headers:
        headers.update(extra_headers)

    base_url = settings.api_base_url
    if transport is None and settings.socket_path is not None:
        transport = httpx.AsyncHTTPTransport(uds=str(settings.socket_path))
        base_url = _UDS_BASE_URL

    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )
