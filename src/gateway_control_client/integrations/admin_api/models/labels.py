"""Ownership labels stamped on gateway resources.

Labels record which Kubernetes object caused a resource to be created, so
that everything derived from one object can be found (and cascade-deleted)
through the cache's label index.
"""

from __future__ import annotations

LABEL_KIND = "k8s/kind"
LABEL_NAMESPACE = "k8s/namespace"
LABEL_NAME = "k8s/name"
LABEL_CONTROLLER_NAME = "k8s/controller-name"
LABEL_MANAGED_BY = "manager-by"

MANAGED_BY = "gateway-control-client"

# Order matters: the label index key is built from these values in sequence.
OWNER_LABEL_KEYS: tuple[str, ...] = (LABEL_KIND, LABEL_NAMESPACE, LABEL_NAME)


def gen_labels(
    kind: str,
    namespace: str,
    name: str,
    controller_name: str | None = None,
    **extra: str,
) -> dict[str, str]:
    """Build the ownership label map for a Kubernetes object.

    Args:
        kind: Kubernetes kind of the owning object (e.g., "HTTPRoute").
        namespace: Namespace of the owning object.
        name: Name of the owning object.
        controller_name: Controller that manages the object, if known.
        **extra: Additional labels to merge in.

    Returns:
        Label dictionary suitable for a resource's ``labels`` field.
    """
    labels = {
        LABEL_KIND: kind,
        LABEL_NAMESPACE: namespace,
        LABEL_NAME: name,
        LABEL_MANAGED_BY: MANAGED_BY,
    }
    if controller_name:
        labels[LABEL_CONTROLLER_NAME] = controller_name
    labels.update(extra)
    return labels
