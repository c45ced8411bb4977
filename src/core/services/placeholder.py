"""Avatar placeholder determinista.

Cuando ninguna configuración devuelve una imagen real se construye la URL de
un servicio de renderizado de avatares (ui-avatars por defecto). Es un valor
derivado, no se descarga nada.
"""

from __future__ import annotations

from urllib.parse import quote, urlencode, urlsplit

from core.config import AppSettings


def build_placeholder_avatar_url(username: str, settings: AppSettings | None = None) -> str:
    settings = settings or AppSettings()
    query = urlencode(
        {
            "name": username,
            "size": settings.placeholder_avatar_size,
            "background": settings.placeholder_avatar_background,
            "color": settings.placeholder_avatar_color,
            "bold": "true" if settings.placeholder_avatar_bold else "false",
        },
        quote_via=quote,
    )
    return f"{settings.placeholder_avatar_base_url}?{query}"


def is_placeholder_avatar(url: str | None, base_url: str) -> bool:
    """True si `url` apunta al mismo host que el servicio de placeholders.

    Se compara el host (no el prefijo exacto) para reconocer también variantes
    como `http://` o `/api?name=`.
    """

    if not url:
        return False
    host = urlsplit(url).hostname
    return host is not None and host == urlsplit(base_url).hostname
