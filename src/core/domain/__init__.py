"""Helpers puros del dominio.

Por qué:
- Aquí viven las funciones sin I/O: predicados sobre objetos, fechas y azar.
- El dominio no conoce HTTP, CLI, ni SDKs.
"""
