"""Errores de los helpers HTTP.

Por qué dos tipos:
- `TransportError`: la petición no produjo una respuesta 2xx (red, timeout,
  URL inválida o status no exitoso).
- `PayloadError`: la respuesta fue 2xx pero el cuerpo no se pudo decodificar
  como se pidió (p.ej. JSON inválido).

Ambos conservan la excepción original en `cause` (y en `__cause__`).
"""

from __future__ import annotations

import httpx


class HelperError(Exception):
    """Base de los errores de la librería."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class TransportError(HelperError):
    @classmethod
    def from_exception(cls, exc: Exception, *, url: str | None = None) -> "TransportError":
        status_code = None
        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
        message = str(exc) or exc.__class__.__name__
        return cls(f"Request to {url} failed: {message}", url=url, status_code=status_code, cause=exc)


class PayloadError(HelperError):
    pass
