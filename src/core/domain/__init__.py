"""Modelos y funciones puras del dominio.

Por qué:
- Aquí viven las estructuras de datos (Pydantic v2) y la lógica sin I/O:
  validación de cédula y separación de nombres.
- El dominio no conoce HTTP, CLI, ni FastAPI: solo conceptos del problema.
"""
