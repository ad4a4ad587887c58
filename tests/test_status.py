"""
Tests for the status renderer.
"""

from unittest.mock import Mock
from rich.text import Text
from mpages.interface.status import StatusRenderer


def test_render_updates_display_and_sink():
    """Rendering stores the line and forwards it to the surface's sink."""
    sink = Mock()
    renderer = StatusRenderer()
    renderer.attach("doc", sink)

    line = Text("Words: 3   Time Elapsed: 00:01")
    renderer.render("doc", line)

    assert renderer.current("doc") is line
    sink.assert_called_once_with(line)


def test_render_to_unknown_surface_is_noop():
    """Rendering to a surface that was never attached does nothing."""
    renderer = StatusRenderer()

    renderer.render("ghost", Text("Words: 1"))

    assert renderer.current("ghost") is None


def test_render_after_detach_is_noop():
    """Once a surface is detached its sink is never called again."""
    sink = Mock()
    renderer = StatusRenderer()
    renderer.attach("doc", sink)
    renderer.detach("doc")

    renderer.render("doc", Text("Words: 1"))

    sink.assert_not_called()
    assert not renderer.is_attached("doc")


def test_clear_empties_the_status_area():
    """Clearing drops the display state and pushes an empty line."""
    sink = Mock()
    renderer = StatusRenderer()
    renderer.attach("doc", sink)
    renderer.render("doc", Text("Words: 9"))

    renderer.clear("doc")

    assert renderer.current("doc") is None
    assert sink.call_args.args[0].plain == ""


def test_clear_unknown_surface_is_noop():
    """Clearing a surface that is not attached is silent."""
    renderer = StatusRenderer()
    renderer.clear("ghost")

    assert renderer.current("ghost") is None
