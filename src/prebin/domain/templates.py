"""Rendering of `{ var }` style path and URL templates."""

from __future__ import annotations

import re
from collections.abc import Mapping

from prebin.domain.exceptions import TemplateRenderError

_PLACEHOLDER = re.compile(r"\{\s*([A-Za-z0-9_-]+)\s*\}")


def render_template(template: str, variables: Mapping[str, str | None]) -> str:
    """Substitute every `{ name }` placeholder in a template.

    Args:
        template: Template text, e.g. ``"{ name }-{ target }/{ bin }{ binary-ext }"``.
        variables: Values by placeholder name. A None value is treated as unset.

    Returns:
        The rendered string.

    Raises:
        TemplateRenderError: If the template uses a variable that is not set.
    """

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        value = variables.get(key)
        if value is None:
            raise TemplateRenderError(
                f"template {template!r} uses unknown or unset variable {key!r}"
            )
        return value

    return _PLACEHOLDER.sub(substitute, template)
