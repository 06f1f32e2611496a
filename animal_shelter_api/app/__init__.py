"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules, organised by layer: ``api`` (HTTP routes), ``services``
(business rules), ``repositories`` (data access), ``schemas`` (API
payloads), ``models`` (stored records) and ``core`` (configuration,
logging, database and errors).
"""

from .main import app  # noqa: F401
