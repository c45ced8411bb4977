"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los servicios concretos.
- Permite invertir dependencias: la CLI depende de abstracciones.
"""

from core.interfaces.resolver import ProfileResolver

__all__ = ["ProfileResolver"]
