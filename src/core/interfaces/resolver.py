"""Contrato del resolvedor de perfiles.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- La CLI y los tests dependen de esta abstracción, no del servicio concreto
  ni del scraper que hay detrás.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import InstagramProfile


@runtime_checkable
class ProfileResolver(Protocol):
    """Contrato mínimo para resolver un username.

    Reglas de diseño:
    - `resolve` es asíncrono porque hará I/O (HTTP).
    - Nunca lanza: los fallos se devuelven como `InstagramProfile.failed`.
    """

    async def resolve(self, username: str) -> InstagramProfile:
        """Resuelve `username` y devuelve el perfil normalizado."""

        ...
