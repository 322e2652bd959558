"""Render a fetched issue through a Jinja2 template.

Templates see three variables:

- ``issue``: number, title, body, state, html_url, author, created_at, label_names
- ``comments``: list of comments with body, author, created_at, html_url
- ``labels``: list of labels with name, color, description

Templates run in a sandbox with strict undefined handling, so a reference to a
field that does not exist fails the render instead of producing empty text.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from jinja2 import StrictUndefined, Template, TemplateError, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from issue_rca.errors import TemplateCompileError, TemplateLoadError, TemplateRenderError
from issue_rca.github.client import RenderContext

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "rca-pr"

DEFAULT_TEMPLATE = """
{{ issue.body }}
{% for comment in comments %}
{{ comment.body }}
{% endfor %}
{% for label in labels %}
{{ label.name }}
{% endfor %}
"""


def _environment() -> SandboxedEnvironment:
    # Output is Markdown, not HTML.
    return SandboxedEnvironment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def load_template_source(path: Path | None) -> str:
    """Return the template text in `path`, or the default template when no path is given."""

    if path is None:
        return DEFAULT_TEMPLATE
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(path, str(e)) from e


def compile_template(source: str, *, name: str = DEFAULT_TEMPLATE_NAME) -> Template:
    """Compile `source` into a template.

    Raises:
        TemplateCompileError: if the template cannot be parsed.
    """

    try:
        template = _environment().from_string(source)
    except TemplateSyntaxError as e:
        raise TemplateCompileError(name, e.message or str(e), e.lineno) from e
    template.name = name
    return template


def render(template: Template, context: RenderContext, out: TextIO | None = None) -> None:
    """Execute `template` against `context`, writing output to `out` as it is produced.

    Raises:
        TemplateRenderError: if the template fails while rendering.
    """

    stream = out if out is not None else sys.stdout
    name = template.name or DEFAULT_TEMPLATE_NAME
    try:
        for chunk in template.generate(**context.as_template_vars()):
            stream.write(chunk)
    except (TemplateError, TypeError, ValueError, ArithmeticError) as e:
        raise TemplateRenderError(name, str(e) or type(e).__name__) from e
    stream.flush()
    logger.debug("Rendered template", extra={"template": name})
