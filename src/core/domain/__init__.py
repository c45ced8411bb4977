"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""

from core.domain.models import (
    ExtractedFields,
    InstagramProfile,
    JSONValue,
    ProxySettings,
    RequestConfiguration,
)

__all__ = [
    "ExtractedFields",
    "InstagramProfile",
    "JSONValue",
    "ProxySettings",
    "RequestConfiguration",
]
