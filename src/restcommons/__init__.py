"""
restcommons - Shared REST Service Foundation

Status reporting and a uniform JSON error contract for FastAPI services.
"""

from importlib.metadata import version

__version__ = version("restcommons")
