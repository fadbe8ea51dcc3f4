# tests/test_email_templates.py
import pytest

from app.core.email_templates import (
    EMAIL_VERIFICATION_TEMPLATE,
    WELCOME_TEMPLATE,
    email_template,
    render_template,
)
from app.core.errors import TemplateCompilationError, TemplateNotFoundError

DATA = {"code": "123456", "expiryMinutes": 60, "email": "a@example.com", "year": 2025}


def test_email_template_is_idempotent():
    first = email_template(EMAIL_VERIFICATION_TEMPLATE, DATA)
    second = email_template(EMAIL_VERIFICATION_TEMPLATE, DATA)
    assert first == second
    assert "123456" in first


def test_welcome_template_renders_name_and_link():
    html = email_template(
        WELCOME_TEMPLATE,
        {"name": "Asha", "email": "a@example.com", "frontendUrl": "https://finishd.app", "year": 2025},
    )
    assert "Asha" in html
    assert "https://finishd.app" in html


def test_values_are_escaped():
    assert render_template("<p>{{ name }}</p>", {"name": "<b>x</b>"}) == "<p>&lt;b&gt;x&lt;/b&gt;</p>"


def test_missing_template_raises_not_found():
    with pytest.raises(TemplateNotFoundError):
        email_template("does-not-exist.html", DATA)


def test_broken_template_raises_compilation_error(tmp_path):
    (tmp_path / "broken.html").write_text("<p>{{ code </p>", encoding="utf-8")
    with pytest.raises(TemplateCompilationError):
        email_template("broken.html", DATA, template_dir=tmp_path)


def test_missing_value_raises_compilation_error():
    with pytest.raises(TemplateCompilationError):
        render_template("<p>{{ code }}</p>", {})
