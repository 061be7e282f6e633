"""
Client package - Python API client for organizer tooling.
"""

from client.session import ClientSession
from client.api import PotluckClient, raise_for_error
from client.catalog import CatalogMirror

__all__ = ["ClientSession", "PotluckClient", "CatalogMirror", "raise_for_error"]
