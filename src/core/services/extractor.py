"""Extracción best-effort de perfiles desde JSON del scraper.

El scraper upstream no versiona su salida: el mismo actor puede devolver un
objeto plano, un array de items, o el perfil anidado bajo `owner`,
`graphql.user`, `data`... Aquí no hay cadenas de `if` por formato sino una
tabla declarativa:

- `FIELD_SYNONYMS`: campo canónico -> claves aceptadas, en orden.
- `CONTAINER_PATHS`: rutas anidadas donde buscar si el nivel actual no tiene
  datos, en orden de prioridad.

`_probe` recorre esa tabla de forma genérica. Solo sigue las rutas listadas
(nunca comodines), así que sobre JSON (siempre acíclico) siempre termina.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from core.domain.models import ExtractedFields, InstagramProfile, JSONValue

logger = logging.getLogger(__name__)

FIELD_SYNONYMS: Mapping[str, tuple[str, ...]] = {
    "username": ("username",),
    "display_name": ("fullName", "full_name", "displayName", "display_name", "name"),
    "avatar_url": (
        "profilePicUrlHD",
        "profile_pic_url_hd",
        "profilePicUrl",
        "profile_pic_url",
        "avatar",
        "picture",
    ),
}

CONTAINER_PATHS: tuple[tuple[str, ...], ...] = (
    ("owner",),
    ("user",),
    ("graphql", "user"),
    ("data",),
    ("profile",),
    ("userInfo",),
    # Contenedores genéricos (array u objeto).
    ("items",),
    ("results",),
    ("profiles",),
    ("users",),
    ("posts",),
)

EXISTENCE_KEY = "urlsFromSearch"


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _first_text(obj: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        found = _text(obj.get(key))
        if found:
            return found
    return None


def _get_path(obj: Mapping[str, Any], path: tuple[str, ...]) -> JSONValue:
    current: Any = obj
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _direct_fields(obj: Mapping[str, Any]) -> ExtractedFields | None:
    values = {field: _first_text(obj, keys) for field, keys in FIELD_SYNONYMS.items()}
    fields = ExtractedFields(**values)
    # Un nombre visible sin username ni avatar no identifica el perfil.
    return fields if fields.usable else None


def _probe(node: JSONValue) -> ExtractedFields | None:
    if isinstance(node, list):
        for item in node:
            found = _probe(item)
            if found is not None:
                return found
        return None

    if not isinstance(node, dict):
        return None

    direct = _direct_fields(node)
    if direct is not None:
        return direct

    for path in CONTAINER_PATHS:
        nested = _get_path(node, path)
        if not nested:
            continue
        found = _probe(nested)
        if found is not None:
            logger.debug("Profile fields found under %s", ".".join(path))
            return found
    return None


def _has_search_urls(node: JSONValue) -> bool:
    if isinstance(node, list):
        return any(_has_search_urls(item) for item in node if isinstance(item, dict))
    if isinstance(node, dict):
        urls = node.get(EXISTENCE_KEY)
        return isinstance(urls, list) and len(urls) > 0
    return False


def extract(document: JSONValue, username: str) -> ExtractedFields | None:
    """Busca campos de perfil en `document`.

    Prioridad: campos directos, contenedores conocidos (recursivo), elementos
    de un array raíz; si nada aparece pero hay `urlsFromSearch`, el perfil
    existe aunque sin detalle. Devuelve `None` si no hay nada utilizable.
    No muta `document`.
    """

    found = _probe(document)
    if found is not None:
        return found

    if _has_search_urls(document):
        logger.debug("Only %s present; profile exists without details", EXISTENCE_KEY)
        return ExtractedFields(username=username, display_name=username, avatar_url="")

    return None


def promote(fields: ExtractedFields, username: str) -> InstagramProfile:
    """Completa un `ExtractedFields` con los defaults y lo convierte en perfil."""

    resolved = fields.username or username
    return InstagramProfile(
        username=resolved,
        display_name=fields.display_name or resolved,
        avatar_url=fields.avatar_url or "",
        exists=True,
    )
