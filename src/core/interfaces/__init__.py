"""Interfaces del Core.

Por qué:
- Contratos estructurales (Protocol) que implementan los adaptadores.
- El core depende de abstracciones, nunca de httpx ni de la CLI.
"""

from core.interfaces.credentials import CredentialsStore, Harvester

__all__ = ["CredentialsStore", "Harvester"]
