"""Cliente del scraper upstream (task de Apify en modo run-sync).

Estos helpers están en adapters porque son I/O puro (HTTP): un POST con la
configuración como cuerpo JSON y el JSON de vuelta, sin interpretar su forma.
"""

from __future__ import annotations

import json
import logging

import httpx

from core.config import AppSettings
from core.domain.models import JSONValue, RequestConfiguration

logger = logging.getLogger(__name__)

_ERROR_BODY_PREVIEW = 500


class ScraperError(RuntimeError):
    """Fallo de un intento contra el scraper (red, status o JSON inválido)."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(ValueError):
    """No hay endpoint de scraper configurado."""


def scraper_request_params(settings: AppSettings) -> dict[str, str]:
    if settings.scraper_api_token is None:
        return {}
    return {"token": settings.scraper_api_token.get_secret_value()}


async def run_scraper_task(
    client: httpx.AsyncClient,
    *,
    configuration: RequestConfiguration,
    settings: AppSettings,
) -> JSONValue:
    """Envía una configuración al scraper y devuelve el JSON decodificado.

    Lanza `ScraperError` ante error de transporte, status no 2xx o cuerpo que
    no es JSON; el llamador decide si pasa a la siguiente configuración.
    """

    endpoint = settings.scraper_endpoint_url
    if not endpoint:
        raise ConfigurationError("scraper endpoint is not configured (INSTA_RESOLVER_SCRAPER_ENDPOINT_URL)")

    try:
        resp = await client.post(
            endpoint,
            params=scraper_request_params(settings) or None,
            json=configuration.payload(),
            headers={"Content-Type": "application/json"},
        )
    except httpx.HTTPError as exc:
        raise ScraperError(f"transport error: {exc.__class__.__name__}: {exc}") from exc

    if not resp.is_success:
        body = (resp.text or "")[:_ERROR_BODY_PREVIEW]
        raise ScraperError(
            f"scraper responded with HTTP {resp.status_code}",
            status_code=resp.status_code,
            body=body,
        )

    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ScraperError("scraper response is not valid JSON", status_code=resp.status_code) from exc
