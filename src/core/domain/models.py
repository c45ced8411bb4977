"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias camelCase reproducen el contrato JSON que consumen los clientes
  (`displayName`, `avatarUrl`) sin renunciar a nombres pythonic.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

# Valor JSON arbitrario tal como lo devuelve el scraper (objeto / array / escalar / null).
JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


class InstagramProfile(BaseModel):
    """Perfil canónico resuelto para un username.

    Estados posibles:
    - Datos reales: `exists=True` y `avatar_url` con una imagen del upstream.
    - Sin imagen / placeholder: `exists=True` con `avatar_url` vacío o sintetizado.
    - Fallo duro: `exists=False`, `avatar_url=""` y sin `display_name`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = Field(
        ...,
        description="Handle resuelto (o el de entrada si el upstream no lo devuelve).",
    )
    display_name: str | None = Field(
        default=None,
        alias="displayName",
        description="Nombre visible del perfil.",
    )
    avatar_url: str = Field(
        default="",
        alias="avatarUrl",
        description="URL de avatar en alta resolución; vacío si no hay imagen.",
    )
    exists: bool = Field(
        default=True,
        description="False solo cuando el pipeline de búsqueda falló por completo.",
    )

    @model_validator(mode="after")
    def _check_failure_state(self) -> "InstagramProfile":
        if not self.exists and (self.avatar_url or self.display_name is not None):
            raise ValueError("a non-existent profile cannot carry a display name or avatar")
        return self

    @classmethod
    def failed(cls, username: str) -> "InstagramProfile":
        """Centinela de fallo duro (red/parsing)."""

        return cls(username=username, display_name=None, avatar_url="", exists=False)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ExtractedFields(BaseModel):
    """Registro parcial encontrado al recorrer un documento JSON.

    No se expone a los llamadores: siempre se promueve a `InstagramProfile`.
    """

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

    @property
    def usable(self) -> bool:
        return bool(self.username or self.avatar_url)


class ProxySettings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    use_apify_proxy: bool = Field(default=True, alias="useApifyProxy")
    apify_proxy_groups: tuple[Literal["RESIDENTIAL", "DATACENTER"], ...] = Field(
        default=("RESIDENTIAL",),
        alias="apifyProxyGroups",
        min_length=1,
    )


class RequestConfiguration(BaseModel):
    """Una estrategia de consulta para el scraper upstream.

    Por qué inmutable:
    - Las configuraciones se construyen por llamada y no tienen identidad más
      allá de su posición en la secuencia; congelarlas evita que el
      orquestador las altere entre intentos.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search: str = Field(..., min_length=1, description="URL de perfil o username.")
    search_type: Literal["user"] = Field(default="user", alias="searchType")
    search_limit: int = Field(default=1, ge=1, le=5, alias="searchLimit")
    results_type: Literal["details", "posts"] = Field(default="details", alias="resultsType")
    results_limit: int = Field(default=1, ge=1, le=5, alias="resultsLimit")
    add_parent_data: bool = Field(default=True, alias="addParentData")
    enhance_user_search_with_facebook_page: bool | None = Field(
        default=None,
        alias="enhanceUserSearchWithFacebookPage",
    )
    include_has_stories: bool | None = Field(default=None, alias="includeHasStories")
    include_has_highlights: bool | None = Field(default=None, alias="includeHasHighlights")
    include_recent_posts: bool | None = Field(default=None, alias="includeRecentPosts")
    extend_output_function: str | None = Field(
        default=None,
        alias="extendOutputFunction",
        description="Snippet JS que el scraper ejecuta sobre cada resultado.",
    )
    proxy: ProxySettings = Field(default_factory=ProxySettings)

    def payload(self) -> dict[str, Any]:
        """Cuerpo JSON tal como lo espera el scraper."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
