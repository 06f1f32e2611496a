"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services work
with repositories rather than with database connections directly, so
the storage can be swapped without changing API handlers.
"""
