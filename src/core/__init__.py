"""Core: configuración, helpers puros del dominio e interfaces."""
