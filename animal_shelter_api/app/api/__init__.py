"""
HTTP layer of the Animal Shelter API.

Routes are grouped by API version (``v1``).  Each version exposes a
``router`` that ``app.main`` mounts under ``settings.api_prefix``.
"""
