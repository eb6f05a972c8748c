"""Tests for template rendering."""

import pytest

from prebin.domain.exceptions import TemplateRenderError
from prebin.domain.templates import render_template


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.Template")
class TestRenderTemplate:
    """Tests for render_template()."""

    def test_substitutes_spaced_and_unspaced_placeholders(self) -> None:
        """Both `{ name }` and `{name}` are placeholders."""
        rendered = render_template(
            "{ name }-{target}{ binary-ext }",
            {"name": "foo", "target": "x86_64-pc-windows-msvc", "binary-ext": ".exe"},
        )
        assert rendered == "foo-x86_64-pc-windows-msvc.exe"

    def test_empty_value_is_allowed(self) -> None:
        """An empty string is a valid value."""
        assert render_template("{ bin }{ binary-ext }", {"bin": "foo", "binary-ext": ""}) == "foo"

    def test_unknown_variable_raises(self) -> None:
        """Referencing an unknown variable is an error."""
        with pytest.raises(TemplateRenderError, match="nope"):
            render_template("{ nope }", {"name": "foo"})

    def test_unset_variable_raises(self) -> None:
        """A None value counts as unset."""
        with pytest.raises(TemplateRenderError, match="repo"):
            render_template("{ repo }/releases", {"repo": None})

    def test_text_without_placeholders_unchanged(self) -> None:
        """Literal text passes through."""
        assert render_template("bin/foo", {}) == "bin/foo"
