"""Predicados sobre colecciones de objetos.

Un "objeto" puede ser:
- un `Mapping` (dict, etc.): las propiedades son sus claves;
- cualquier otra instancia: las propiedades propias son las de `__dict__`,
  los slots asignados y los campos de una namedtuple.

Los atributos de clase cuentan como heredados, no como propios.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Iterable, Mapping
from typing import Any

# Valor compartido para "propiedad ausente": dos objetos sin la propiedad colisionan.
_MISSING = object()


def has_own_property(obj: Any, prop: str) -> bool:
    """True si `prop` es un valor propio de la instancia.

    Cuenta claves de mappings, atributos de `__dict__`, slots asignados y
    campos de namedtuples. Los atributos de clase no cuentan.
    """

    if isinstance(obj, Mapping):
        return prop in obj
    if prop in getattr(obj, "__dict__", {}):
        return True
    if isinstance(obj, tuple) and prop in getattr(type(obj), "_fields", ()):
        return True
    slot = inspect.getattr_static(type(obj), prop, None)
    if isinstance(slot, types.MemberDescriptorType):
        try:
            slot.__get__(obj, type(obj))
        except AttributeError:
            # Slot declarado pero nunca asignado.
            return False
        return True
    return False


def get_property(obj: Any, prop: str) -> Any:
    """Devuelve `obj[prop]` (o el atributo), o el centinela de ausencia."""

    if isinstance(obj, Mapping):
        return obj.get(prop, _MISSING)
    return getattr(obj, prop, _MISSING)


def every_object_has_own_property(objects: Iterable[Any], prop: str) -> bool:
    """True si todos los objetos definen `prop` directamente (vacío => True)."""

    return all(has_own_property(obj, prop) for obj in objects)


def every_object_has_unique_property_value(objects: Iterable[Any], prop: str) -> bool:
    """True si ningún par de objetos comparte el valor de `prop`.

    Reglas:
    - `None` y "ausente" son valores distintos.
    - Dos objetos sin la propiedad comparten el valor "ausente" (no únicos).
    - Valores de distinto tipo son distintos aunque `==` diga lo contrario
      (`1` y `True`, `1` y `1.0`).
    - Los valores no hashables se comparan por igualdad.
    """

    seen: set[Any] = set()
    seen_unhashable: list[Any] = []
    for obj in objects:
        value = get_property(obj, prop)
        key = (type(value), value)
        try:
            if key in seen:
                return False
            seen.add(key)
        except TypeError:
            if any(type(value) is type(other) and value == other for other in seen_unhashable):
                return False
            seen_unhashable.append(value)
    return True
