"""Field rendering: substitute ``{{name}}`` placeholders with row values.

A single Jinja2 :class:`~jinja2.Environment` is created at startup by
:func:`create_environment` and shared read-only by every render call. It is
configured with:

- ``autoescape=False``: rendered values are ledger syntax (account names,
  amounts, narrations) and must come out verbatim, never HTML-escaped.
- ``StrictUndefined``: a placeholder naming a field that the ``input``
  mapping does not define fails instead of rendering as an empty string.
- ``keep_trailing_newline=True``: output matches the template text exactly.
- no globals: ``range``, ``dict``, ``lipsum`` and friends are removed so the
  row context is the only namespace.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias

import jinja2

from .errors import TemplateRenderError

RowContext: TypeAlias = Mapping[str, str]
"""Per-row mapping from logical field name to the raw CSV cell value."""


def create_environment() -> jinja2.Environment:
    """Build the process-wide template environment (no escaping, strict names)."""

    env = jinja2.Environment(
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )
    # Only row fields resolve; no range/dict/lipsum etc.
    env.globals.clear()
    return env


def render_field(
    env: jinja2.Environment,
    template: str,
    context: RowContext,
    *,
    field: str | None = None,
) -> str:
    """Render ``template`` against ``context`` and return the plain string.

    Raises :class:`TemplateRenderError` (tagged with ``field``) when the
    template is malformed, references a name missing from ``context`` or an
    expression fails while rendering; the original exception is chained as
    ``__cause__``.
    """

    try:
        return env.from_string(template).render(context)
    except jinja2.TemplateError as err:
        raise TemplateRenderError(template, err.message or type(err).__name__, field=field) from err
    except Exception as err:
        # Expressions such as {{ n / 2 }} fail with plain Python errors.
        raise TemplateRenderError(template, f"{type(err).__name__}: {err}", field=field) from err


__all__ = ["RowContext", "create_environment", "render_field"]
