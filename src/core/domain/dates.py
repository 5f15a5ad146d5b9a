"""Aritmética de calendario.

Por qué `timedelta(days=1)` y no segundos:
- Sumar días a `date`/`datetime` avanza el campo de día del calendario
  (hora de pared), así que los cambios de horario (DST) no desplazan la hora.

Todas las funciones aceptan `date`, `datetime` o un string ISO-8601 y
devuelven valores nuevos del mismo tipo (un string se convierte en `date`).
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TypeVar

DateT = TypeVar("DateT", date, datetime)

_ONE_DAY = timedelta(days=1)


def parse_date(value: date | str) -> date:
    """Convierte un string ISO-8601 (`YYYY-MM-DD`) en `date`; deja pasar fechas."""

    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def _start_of_day(value: DateT) -> DateT:
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return value


def _align(value: date, other: date) -> date:
    """Convierte un `date` en `datetime` (medianoche, mismo tzinfo) si `other` lo es."""

    if isinstance(other, datetime) and not isinstance(value, datetime):
        return datetime.combine(value, time(), tzinfo=other.tzinfo)
    return value


def get_all_dates_between_inclusive(start: DateT | str, end: DateT | str) -> list[DateT]:
    """Todos los días de `start` a `end`, ambos incluidos, en orden ascendente.

    - `end < start` => lista vacía.
    - `start == end` => `[start]`.
    - Si solo un extremo es `datetime`, el otro se toma a medianoche con el
      mismo tzinfo.
    """

    current = parse_date(start)
    last = parse_date(end)
    current, last = _align(current, last), _align(last, current)

    dates: list[DateT] = []
    while current <= last:
        dates.append(current)
        current = current + _ONE_DAY
    return dates


def get_first_of_previous_month(value: DateT | str) -> DateT:
    """Día 1 del mes anterior (enero => 1 de diciembre del año previo)."""

    return get_last_of_previous_month(value).replace(day=1)


def get_last_of_previous_month(value: DateT | str) -> DateT:
    """Último día del mes anterior: el día previo al 1 del mes de `value`."""

    first_of_month = _start_of_day(parse_date(value)).replace(day=1)
    return first_of_month - _ONE_DAY
