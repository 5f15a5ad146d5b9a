"""Contrato de la fuente aleatoria.

Por qué Protocol:
- Cualquier callable sin argumentos que devuelva un float uniforme en [0, 1)
  sirve (`random.random`, `random.Random(seed).random`, un lambda en tests).
- Evita acoplar los helpers al generador global del módulo `random`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def __call__(self) -> float:
        """Devuelve un float uniforme en [0, 1)."""

        ...
