"""Helpers that turn desired labels into pod patches."""

from typing import Dict, List

from ..api.models import Patch, PatchOperation, Pod

LABELS_PATH = "/metadata/labels"


def escape_json_pointer(token: str) -> str:
    """Escape a single JSON pointer reference token (RFC 6901)."""
    return token.replace("~", "~0").replace("/", "~1")


def label_patches(pod: Pod, labels: Dict[str, str]) -> List[Patch]:
    """
    Build the patches that set the given labels on a pod.

    A pod without a labels map gets the whole map added at once, since
    JSON Patch cannot add a member to an object that does not exist.
    Otherwise existing keys are replaced and new keys are added.

    Args:
        pod: Pod as last read from the API
        labels: Labels to set

    Returns:
        Patches in key order, empty if labels is empty
    """
    if not labels:
        return []

    current = pod.metadata.labels if pod.metadata else None
    if current is None:
        return [Patch(operation=PatchOperation.ADD, path=LABELS_PATH, value=dict(labels))]

    patches = []
    for key in sorted(labels):
        operation = PatchOperation.REPLACE if key in current else PatchOperation.ADD
        patches.append(
            Patch(
                operation=operation,
                path=f"{LABELS_PATH}/{escape_json_pointer(key)}",
                value=labels[key],
            )
        )
    return patches
