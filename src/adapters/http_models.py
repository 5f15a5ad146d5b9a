"""Modelos de entrada/salida de los helpers HTTP.

Por qué en adapters y no en el dominio:
- Referencian tipos de I/O (`httpx.Cookies`, `BeautifulSoup`); el dominio
  solo contiene funciones puras.
"""

from __future__ import annotations

from typing import Any

import httpx
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field, InstanceOf
from pydantic.config import ConfigDict


class RequestParams(BaseModel):
    """Parámetros de una petición, pasados al transporte tal cual.

    Acepta los nombres clásicos (`json`, `followAllRedirects`) como alias.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    uri: str = Field(..., description="URL destino.")
    qs: dict[str, Any] | None = Field(
        default=None,
        description="Parámetros de query string.",
    )
    headers: dict[str, str] | None = Field(
        default=None,
        description="Headers adicionales (sobrescriben los por defecto).",
    )
    decode_json: bool = Field(
        default=False,
        alias="json",
        description="Decodificar el cuerpo de la respuesta como JSON.",
    )
    method: str = Field(default="GET", min_length=1)
    form: dict[str, Any] | None = Field(
        default=None,
        description="Cuerpo application/x-www-form-urlencoded.",
    )
    jar: InstanceOf[httpx.Cookies] | None = Field(
        default=None,
        description="Cookie jar compartido entre peticiones.",
    )
    follow_all_redirects: bool = Field(
        default=False,
        alias="followAllRedirects",
        description="Seguir redirecciones también en métodos no-GET.",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Timeout de esta petición; si falta se usa el de AppSettings.",
    )


class DocumentResponse(BaseModel):
    """Documento HTML parseado más el cookie jar usado para obtenerlo."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: InstanceOf[BeautifulSoup]
    cookie_jar: InstanceOf[httpx.Cookies]
