"""Orquestación de la resolución de perfiles.

Flujo por username:
- Se prueban las configuraciones de `build_configurations` estrictamente en
  orden, una tras otra (nunca en paralelo: cada intento consume cuota del
  scraper y solo se lanza si el anterior no bastó).
- El primer perfil con avatar real gana (`is_good_enough`).
- Si ninguno lo tiene, se devuelve el mejor candidato o un placeholder.
- Si ningún intento llega a obtener JSON, se devuelve el centinela
  `InstagramProfile.failed`.

`resolve` nunca lanza: la CLI y otros entry-points reciben siempre un perfil.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import httpx

from adapters.http_client import build_async_client
from adapters.scraper_client import ScraperError, run_scraper_task
from core.config import AppSettings
from core.domain.models import InstagramProfile
from core.services.configurations import build_configurations, clean_username
from core.services.extractor import extract, promote
from core.services.placeholder import build_placeholder_avatar_url, is_placeholder_avatar

logger = logging.getLogger(__name__)


def is_good_enough(profile: InstagramProfile | None, placeholder_base_url: str) -> bool:
    """Criterio de parada temprana: perfil existente con avatar real."""

    if profile is None or not profile.exists:
        return False
    if not profile.avatar_url:
        return False
    return not is_placeholder_avatar(profile.avatar_url, placeholder_base_url)


def placeholder_profile(username: str, settings: AppSettings) -> InstagramProfile:
    return InstagramProfile(
        username=username,
        display_name=username,
        avatar_url=build_placeholder_avatar_url(username, settings),
        exists=True,
    )


class ProfileResolutionService:
    """Implementa `core.interfaces.ProfileResolver` contra el scraper HTTP."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def resolve(self, username: str) -> InstagramProfile:
        canonical = clean_username(username)
        if not canonical:
            logger.warning("Empty username %r, skipping lookup", username)
            return InstagramProfile.failed(username)
        try:
            return await self._resolve(canonical)
        except Exception:
            logger.exception("Profile lookup for %s failed", canonical)
            return InstagramProfile.failed(canonical)

    async def _resolve(self, username: str) -> InstagramProfile:
        settings = self._settings
        configurations = build_configurations(username)

        answered = 0
        best: InstagramProfile | None = None

        async with build_async_client(settings, transport=self._transport) as client:
            for index, configuration in enumerate(configurations, start=1):
                logger.debug("Trying configuration %d/%d for %s", index, len(configurations), username)
                try:
                    document = await run_scraper_task(client, configuration=configuration, settings=settings)
                except ScraperError as exc:
                    logger.warning("Configuration %d failed for %s: %s", index, username, exc)
                    if exc.body:
                        logger.debug("Error response: %s", exc.body)
                    continue

                answered += 1
                fields = extract(document, username)
                if fields is None:
                    logger.debug("Configuration %d returned no profile data", index)
                    continue

                profile = promote(fields, username)
                if is_good_enough(profile, settings.placeholder_avatar_base_url):
                    logger.info("Configuration %d resolved %s with a real avatar", index, username)
                    return profile
                if best is None and profile.exists:
                    logger.debug("Configuration %d found %s without avatar, continuing", index, username)
                    best = profile

        if answered == 0:
            logger.error("Every configuration failed for %s", username)
            return InstagramProfile.failed(username)

        if best is not None:
            return best

        logger.info("No detailed profile data for %s, using placeholder avatar", username)
        return placeholder_profile(username, settings)

    async def resolve_many(
        self,
        usernames: Sequence[str],
        *,
        max_concurrency: int | None = None,
    ) -> list[InstagramProfile]:
        """Resuelve varios usernames en paralelo (cada uno sigue siendo secuencial)."""

        limit = max_concurrency or self._settings.max_concurrency
        sem = asyncio.Semaphore(max(1, limit))

        async def resolve_one(name: str) -> InstagramProfile:
            async with sem:
                return await self.resolve(name)

        return list(await asyncio.gather(*(resolve_one(name) for name in usernames)))


async def get_profile(
    username: str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> InstagramProfile:
    """Entry-point público: resuelve un username sin lanzar nunca."""

    service = ProfileResolutionService(settings, transport=transport)
    return await service.resolve(username)
