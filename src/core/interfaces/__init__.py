"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que se inyectan en los helpers.
- Permite sustituir dependencias (p.ej. la fuente aleatoria) en tests.
"""
