"""Shared helpers for the extensions defaulting functions."""

from typing import Dict, Optional

from apischeme.pod.types import PodTemplateSpec


def get_template_labels(template: Optional[PodTemplateSpec]) -> Optional[Dict[str, str]]:
    """Extract the labels of an embedded pod template.

    Args:
        template: Pod template, possibly absent

    Returns:
        The template's labels, or None when there is no template or it
        carries no labels
    """
    if template is None:
        return None
    return template.labels
