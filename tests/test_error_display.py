"""Tests for activation error rendering and markup escaping."""

from io import StringIO

from rich.console import Console

from module_activation.errors import CyclicOrderingError
from module_activation.errors import InvalidExclusionError
from module_activation.errors import RegistryError
from module_activation.ui import display_activation_error
from module_activation.utils.error_format import escape_markup
from module_activation.utils.error_format import format_error_message


def _console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, width=120, no_color=True), buf


class TestDisplayActivationError:
    """Test the Rich panels for activation failures."""

    def test_invalid_exclusions_lists_modules(self):
        console, buf = _console()

        handled = display_activation_error(console, InvalidExclusionError(["acme.a.A", "acme.b.B"]))

        output = buf.getvalue()
        assert handled is True
        assert "Invalid Exclusions" in output
        assert "could not be excluded" in output
        assert "✗" in output
        assert "acme.a.A" in output
        assert "acme.b.B" in output

    def test_cycle_lists_unresolved(self):
        console, buf = _console()

        display_activation_error(console, CyclicOrderingError(["Y", "X"]))

        output = buf.getvalue()
        assert "Ordering Cycle" in output
        assert "Ordering cycle detected between modules: X, Y" in output

    def test_generic_activation_error(self):
        console, buf = _console()

        display_activation_error(console, RegistryError("No activation candidates found."))

        assert "Activation Failed" in buf.getvalue()

    def test_other_errors_not_handled(self):
        console, buf = _console()

        assert display_activation_error(console, ValueError("nope")) is False
        assert buf.getvalue() == ""


class TestErrorFormat:
    """Test message helpers."""

    def test_empty_message_gets_placeholder(self):
        assert format_error_message(KeyError()) == "KeyError: (no additional details)"

    def test_type_prefix(self):
        assert format_error_message(ValueError("bad"), include_type=True) == "ValueError: bad"
        assert format_error_message(ValueError("bad"), include_type=False) == "bad"

    def test_module_ids_with_brackets_are_escaped(self):
        console, buf = _console()

        console.print(f"Excluded {escape_markup('[/acme.web]')}")

        assert "[/acme.web]" in buf.getvalue()
