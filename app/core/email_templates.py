# app/core/email_templates.py
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError, select_autoescape

from app.core.errors import TemplateCompilationError, TemplateNotFoundError

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "email_templates"

# Template file names
EMAIL_VERIFICATION_TEMPLATE = "email-verification-template.html"
PHONE_VERIFICATION_TEMPLATE = "phone-verification-template.html"
PASSWORD_RESET_TEMPLATE = "password-reset-template.html"
WELCOME_TEMPLATE = "welcome-template.html"


def render_template(source: str, data: Mapping[str, Any]) -> str:
    """
    Render template source with `data`.

    Pure: a fresh Environment per call, nothing registered globally.
    Placeholders are `{{ name }}`; values are HTML-escaped and a missing
    placeholder value is an error.

    Raises:
        TemplateCompilationError: template has a syntax error or fails to render.
    """
    env = Environment(
        autoescape=select_autoescape(default=True, default_for_string=True),
        undefined=StrictUndefined,
    )
    try:
        return env.from_string(source).render(**data)
    except TemplateError as e:
        raise TemplateCompilationError(f"Failed to compile email template: {e}") from e


def email_template(
    file_name: str,
    replacements: Mapping[str, Any],
    template_dir: Path = TEMPLATE_DIR,
) -> str:
    """
    Load `file_name` from `template_dir` and render it.

    No caching: the file is re-read on every call, so two calls with the
    same inputs return identical output.

    Raises:
        TemplateNotFoundError: file does not exist.
        TemplateCompilationError: see render_template.
    """
    path = Path(template_dir) / file_name
    if not path.is_file():
        raise TemplateNotFoundError(f"Email template not found: {file_name}")

    source = path.read_text(encoding="utf-8")
    return render_template(source, replacements)
