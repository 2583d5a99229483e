"""
Stateless services over Steam game details.
"""

from steam_client.services.adult_content import AdultContentDetector
from steam_client.services.metadata import MetadataExtractor

__all__ = [
    "AdultContentDetector",
    "MetadataExtractor",
]
