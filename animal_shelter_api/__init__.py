"""
Top‑level package for the Animal Shelter API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``animal_shelter_api.app.main:app``.
"""

__all__ = []
