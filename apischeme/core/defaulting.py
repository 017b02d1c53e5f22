"""Defaulting engine.

Applies the defaulting function registered for an object's kind, then hands
each embedded pod template to the template defaulter collaborator. The
engine works on a private deep copy and returns it, so the caller's object
is never left half-defaulted: either a fully defaulted copy comes back or an
exception propagates and the input is unchanged.
"""

import copy
import logging
from typing import Any, Callable, Optional

from apischeme.core.errors import InvalidArgumentError
from apischeme.core.scheme import Scheme

logger = logging.getLogger(__name__)

TemplateDefaulter = Callable[[Any], Any]
"""Collaborator taking an embedded template and returning its defaulted form."""


class Defaulter:
    """Runs registered defaulting functions on versioned objects.

    Example:
        >>> defaulter = Defaulter(scheme, template_defaulter=default_pod_template)
        >>> defaulted = defaulter.apply(Deployment())
        >>> defaulted.spec.replicas
        1
    """

    def __init__(self, scheme: Scheme, template_defaulter: Optional[TemplateDefaulter] = None):
        """Initialize Defaulter.

        Args:
            scheme: Scheme holding the defaulting functions
            template_defaulter: Collaborator applied to embedded templates
                (None leaves templates exactly as the kind function left them)
        """
        self.scheme = scheme
        self.template_defaulter = template_defaulter

    def apply(self, obj: Any) -> Any:
        """Return a defaulted copy of a versioned object.

        Args:
            obj: Versioned object of a registered kind

        Returns:
            New object with every kind default and template default applied

        Raises:
            InvalidArgumentError: If obj is None or an internal object
            UnknownKindError: If obj's type is not registered
        """
        if obj is None:
            raise InvalidArgumentError("cannot apply defaults to None")

        registration = self.scheme.registration_for(obj)
        if type(obj) is not registration.versioned_type:
            raise InvalidArgumentError(
                f"{type(obj).__name__} is an internal object; only versioned objects are defaulted"
            )

        draft = copy.deepcopy(obj)
        registration.default_fn(draft)

        if self.template_defaulter is not None:
            for path in registration.embedded_templates:
                self._default_embedded(draft, path)

        logger.debug(f"Applied defaults for {registration.kind}")
        return draft

    def _default_embedded(self, obj: Any, path: str) -> None:
        *parents, attribute = path.split(".")
        owner = obj
        for name in parents:
            owner = getattr(owner, name)
            if owner is None:
                return
        template = getattr(owner, attribute)
        if template is None:
            return
        setattr(owner, attribute, self.template_defaulter(template))
