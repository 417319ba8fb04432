"""resorter-admin: back-office server for the Resorter360 listing platform.

Proxies catalogue CRUD to the Resorter360 REST API and owns the local
session layer that delegates credential checks to that same API.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
