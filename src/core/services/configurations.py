"""Secuencia de configuraciones para el scraper.

Cada configuración es una estrategia distinta para pedir el perfil al
scraper upstream, de más específica a menos:

1. Scrape directo de la URL del perfil (proxy residencial).
2. Búsqueda por username con detalle (proxy residencial).
3. Listado de posts, solo para recuperar los datos del `owner` (datacenter).

El builder es puro: mismo username, misma secuencia.
"""

from __future__ import annotations

from core.domain.models import ProxySettings, RequestConfiguration

INSTAGRAM_BASE_URL = "https://www.instagram.com"

_DIRECT_PROFILE_TAG_JS = """async ({ data, item, page, request, customData }) => {
  return {
    ...data,
    directProfileData: true
  };
}"""

_SEARCH_TAG_JS = """async ({ data, item, page, request, customData }) => {
  const profileData = data || item || {};
  return {
    ...profileData,
    searchBasedData: true
  };
}"""


def clean_username(raw: str) -> str:
    """Normaliza el handle: sin espacios y sin `@` inicial."""

    value = raw.strip()
    if value.startswith("@"):
        value = value[1:]
    return value


def profile_url(username: str) -> str:
    return f"{INSTAGRAM_BASE_URL}/{username}/"


def build_configurations(username: str) -> tuple[RequestConfiguration, ...]:
    """Devuelve las configuraciones en orden de prioridad para `username` (ya limpio)."""

    residential = ProxySettings(apify_proxy_groups=("RESIDENTIAL",))
    datacenter = ProxySettings(apify_proxy_groups=("DATACENTER",))

    return (
        RequestConfiguration(
            search=profile_url(username),
            search_limit=3,
            results_type="details",
            results_limit=3,
            enhance_user_search_with_facebook_page=True,
            include_has_stories=True,
            include_has_highlights=True,
            include_recent_posts=True,
            extend_output_function=_DIRECT_PROFILE_TAG_JS,
            proxy=residential,
        ),
        RequestConfiguration(
            search=username,
            search_limit=5,
            results_type="details",
            results_limit=5,
            enhance_user_search_with_facebook_page=False,
            include_has_stories=True,
            include_has_highlights=True,
            include_recent_posts=True,
            extend_output_function=_SEARCH_TAG_JS,
            proxy=residential,
        ),
        RequestConfiguration(
            search=username,
            search_limit=1,
            results_type="posts",
            results_limit=1,
            proxy=datacenter,
        ),
    )
