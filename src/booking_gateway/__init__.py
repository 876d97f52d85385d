"""
Booking Gateway
GraphQL gateway over the booking platform REST services
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
