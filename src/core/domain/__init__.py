"""Modelos y entidades del dominio.

Por qué:
- Mantener estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, la CLI ni el daemon: solo credenciales, paths y valores.
"""
