"""Coordinators for each kind of generated artifact file."""

from .base import ApplyResult, ArtifactCoordinator
from .enums import EnumCoordinator
from .exports import ExportsCoordinator
from .icon_mappings import IconMappingCoordinator
from .image_paths import ImagePathCoordinator

__all__ = [
    "ApplyResult",
    "ArtifactCoordinator",
    "EnumCoordinator",
    "ExportsCoordinator",
    "IconMappingCoordinator",
    "ImagePathCoordinator",
]
