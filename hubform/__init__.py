"""hubform: HubSpot contact-form relay and server-rendered form shell."""

__version__ = "0.1.0"

# Import public API - these imports must come after __version__ to avoid circular import
from hubform.fields import NormalizedField, normalize

__all__ = ["__version__", "NormalizedField", "normalize"]
