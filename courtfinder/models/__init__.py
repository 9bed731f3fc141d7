"""All models imported here so ``Base.metadata`` sees every table."""

from courtfinder.models.base import Base
from courtfinder.models.sport import Sport, VenueSport
from courtfinder.models.venue import Venue

__all__ = [
    "Base",
    "Venue",
    "Sport",
    "VenueSport",
]
