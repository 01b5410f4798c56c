"""
Loci - memory palace trainer.

Spaced-repetition scheduling for itineraries of locations.
"""

from loci.supermemo.constants import ENGINE_VERSION as __version__

__all__ = ["__version__"]
