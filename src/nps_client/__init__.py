"""NPS API client.

Python client for the National Park Service REST API with typed response
models, structured errors and rate-limit tracking.
"""

from .api.errors import NPSError
from .nps import NPSClient
from .parks import ParkOptions, Parks

__version__ = "0.1.0"

__all__ = ["NPSClient", "NPSError", "ParkOptions", "Parks"]
