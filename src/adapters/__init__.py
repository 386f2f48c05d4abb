"""Adaptadores de I/O: cliente HTTP y fuentes externas (SRI, scraping).

Por qué aquí:
- Todo lo que habla con la red vive en adapters; el Core solo ve los Protocols.
"""
