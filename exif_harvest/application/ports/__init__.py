"""Application ports package.

Re-exports the ports the use cases depend on.
"""

from exif_harvest.application.ports.metadata_extractor_port import MetadataExtractorPort
from exif_harvest.application.ports.metadata_store_port import MetadataStorePort
from exif_harvest.application.ports.object_store_port import ObjectStorePort

__all__ = [
    "MetadataExtractorPort",
    "MetadataStorePort",
    "ObjectStorePort",
]
