"""
Persistence models.

Models mirror database rows and are independent of the API payloads
defined in ``schemas``.
"""

from .carer import Carer

__all__ = ["Carer"]
