"""
Pods Module - Black Box Interface

Purpose: Read and patch pods
Interface: PodClient.get_pod(), PodClient.patch_pod(), label_patches()
Hidden: Endpoint layout, JSON Patch encoding, request validation
"""

from .labels import escape_json_pointer, label_patches
from .pods import PodClient

__all__ = ["PodClient", "escape_json_pointer", "label_patches"]
