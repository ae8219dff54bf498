"""
API Module - Black Box Interface

Purpose: Data shapes exchanged with the Kubernetes API
Interface: Pod, Metadata, Patch, PatchOperation, ApiRequest
Hidden: JSON field mapping and validation rules
"""

from .models import ApiRequest, Metadata, Patch, PatchOperation, Pod

__all__ = ["ApiRequest", "Metadata", "Patch", "PatchOperation", "Pod"]
