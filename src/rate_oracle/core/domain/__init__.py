"""
Domain models and value objects.

Contains the RateState snapshot entity.
"""

from rate_oracle.core.domain.rate_state import RateState

__all__ = [
    "RateState",
]
