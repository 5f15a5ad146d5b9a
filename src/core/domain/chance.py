"""Booleanos aleatorios con probabilidad fija."""

from __future__ import annotations

import random

from core.interfaces.random_source import RandomSource


def get_random_boolean_with_set_chance(
    percent_chance: float,
    *,
    rng: RandomSource | None = None,
) -> bool:
    """Devuelve True con una probabilidad de `percent_chance` por ciento.

    Se extrae un valor uniforme en [0, 100) y se compara con `<`, por lo que
    `percent_chance <= 0` nunca es True y `percent_chance >= 100` siempre lo es.
    """

    draw = (rng or random.random)() * 100
    return draw < percent_chance
