"""Helpers HTTP sobre httpx.

Por qué un wrapper:
- Estandariza timeout, User-Agent y el manejo del cookie jar.
- Facilita testeo: el transporte se puede sustituir por `httpx.MockTransport`.

Reglas:
- Un único round trip por llamada; sin reintentos.
- Todo fallo de httpx se captura una vez y se relanza como `TransportError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from adapters.http_errors import PayloadError, TransportError
from adapters.http_models import DocumentResponse, RequestParams
from core.config import AppSettings

logger = logging.getLogger(__name__)

_HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    cookies: httpx.Cookies | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    follow_redirects: bool = True,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la configuración.

    El cliente se enlaza al `CookieJar` subyacente de `cookies` (no a una
    copia), así que los `Set-Cookie` de la respuesta quedan en el jar del
    llamador.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": _HTML_ACCEPT,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout or settings.http_timeout_seconds),
        follow_redirects=follow_redirects,
        headers=headers,
        cookies=cookies.jar if cookies is not None else None,
        transport=transport,
    )


def _coerce_params(params: RequestParams | Mapping[str, Any]) -> RequestParams:
    if isinstance(params, RequestParams):
        return params
    return RequestParams.model_validate(dict(params))


async def _send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    logger.debug("%s %s", method, url)
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise TransportError.from_exception(exc, url=url) from exc
    return response


def _decode_json(response: httpx.Response, url: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Response from %s is not valid JSON: %s", url, exc)
        raise PayloadError(
            f"Response from {url} is not valid JSON",
            url=url,
            status_code=response.status_code,
            cause=exc,
        ) from exc


async def get_json(
    params: RequestParams | Mapping[str, Any],
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Ejecuta la petición descrita por `params` y devuelve el cuerpo JSON.

    Errores:
    - `TransportError` si la petición falla o el status no es 2xx.
    - `PayloadError` si la respuesta 2xx no es JSON.
    """

    params = _coerce_params(params)
    settings = settings or AppSettings()

    async with build_async_client(
        settings,
        extra_headers={"Accept": "application/json"},
        cookies=params.jar,
        transport=transport,
        follow_redirects=settings.follow_redirects,
        timeout=params.timeout,
    ) as client:
        response = await _send(
            client,
            params.method.upper(),
            params.uri,
            params=params.qs,
            headers=params.headers,
            data=params.form,
        )

    return _decode_json(response, params.uri)


async def get_document(
    url: str,
    jar: httpx.Cookies | None = None,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DocumentResponse:
    """GET de `url` parseado como HTML.

    Devuelve el documento y el cookie jar usado: el mismo objeto recibido
    (actualizado con los `Set-Cookie`) o uno nuevo si no se pasó ninguno.
    """

    settings = settings or AppSettings()
    cookie_jar = jar if jar is not None else httpx.Cookies()

    async with build_async_client(
        settings,
        cookies=cookie_jar,
        transport=transport,
        follow_redirects=settings.follow_redirects,
    ) as client:
        response = await _send(client, "GET", url)

    document = BeautifulSoup(response.text, "html.parser")
    return DocumentResponse(document=document, cookie_jar=cookie_jar)


async def post_form(
    params: RequestParams | Mapping[str, Any],
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """POST con cuerpo `application/x-www-form-urlencoded`.

    Devuelve el JSON decodificado si `params.decode_json`, si no el texto.
    Solo sigue redirecciones con `followAllRedirects`.
    """

    params = _coerce_params(params)

    async with build_async_client(
        settings,
        cookies=params.jar,
        transport=transport,
        follow_redirects=params.follow_all_redirects,
        timeout=params.timeout,
    ) as client:
        response = await _send(
            client,
            "POST",
            params.uri,
            params=params.qs,
            headers=params.headers,
            data=params.form,
        )

    if params.decode_json:
        return _decode_json(response, params.uri)
    return response.text


def summarize_document(document: BeautifulSoup, *, base_url: str | None = None) -> dict[str, Any]:
    """Extrae metadata ligera de un documento ya parseado.

    Devuelve keys opcionales:
    - title
    - meta_description
    - og_image (absoluta si se pasa `base_url`)
    """

    out: dict[str, Any] = {}

    if document.title and document.title.string:
        out["title"] = document.title.string.strip()

    tag = document.find("meta", attrs={"name": "description"})
    if tag and tag.get("content"):
        out["meta_description"] = str(tag.get("content")).strip()

    og = document.find("meta", attrs={"property": "og:image"})
    if og and og.get("content"):
        og_image = str(og.get("content")).strip()
        out["og_image"] = urljoin(base_url, og_image) if base_url else og_image

    return out
