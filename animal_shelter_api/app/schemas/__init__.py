"""
Pydantic schema definitions for API payloads.

Schemas are separated from persistence models to decouple the API
representation from the stored one.
"""
