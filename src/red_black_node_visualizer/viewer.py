"""Viewer sessions: stand-alone HTML pages for tree strings.

``write_html`` embeds a tree string in an HTML page that calls
``window.renderVisualizer`` from the renderer bundle.  ``show_in_web_browser``
writes such a page to a temporary file and opens it, but only while the
given ``ViewerRegistry`` has room: as a courtesy, at most ``max_open``
visualizations are counted as open at a time.  Call
``ViewerRegistry.release`` with the returned id once a page is closed.
"""

from __future__ import annotations

import json
import logging
import tempfile
import threading
import uuid
import webbrowser
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_TEMPLATE",
    "MAX_OPEN_VIEWERS",
    "RENDER_PLACEHOLDER",
    "ViewerRegistry",
    "show_in_web_browser",
    "write_html",
]

MAX_OPEN_VIEWERS = 10

RENDER_PLACEHOLDER = "<!-- Call window.renderVisualizer here -->"

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Red-black tree</title>
<script src="red_black_node_visualizer.js"></script>
</head>
<body>
<div id="root"></div>
<script>
<!-- Call window.renderVisualizer here -->
</script>
</body>
</html>
"""


class ViewerRegistry:
    """Thread-safe set of open viewer ids, capped at ``max_open``.

    Args:
        max_open: Maximum number of viewers counted as open at once.
            Defaults to ``MAX_OPEN_VIEWERS``.
    """

    def __init__(self, max_open: int = MAX_OPEN_VIEWERS) -> None:
        if max_open < 1:
            msg = f"max_open must be >= 1, got {max_open}"
            raise ValueError(msg)
        self._max_open = max_open
        self._ids: set[str] = set()
        self._lock = threading.Lock()

    @property
    def max_open(self) -> int:
        return self._max_open

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def __contains__(self, viewer_id: object) -> bool:
        with self._lock:
            return viewer_id in self._ids

    def acquire(self) -> str | None:
        """Register a new viewer; return its id, or None when at the limit."""
        with self._lock:
            if len(self._ids) >= self._max_open:
                return None
            viewer_id = str(uuid.uuid4())
            self._ids.add(viewer_id)
            return viewer_id

    def release(self, viewer_id: str) -> None:
        """Stop counting ``viewer_id`` against the limit.  Unknown ids are ignored."""
        with self._lock:
            self._ids.discard(viewer_id)


def _script_literal(value: str) -> str:
    """Return a JavaScript string literal for ``value`` that is safe inside <script>."""
    return json.dumps(value).replace("</", "<\\/")


def write_html(
    tree_str: str | None,
    output: str | Path,
    viewer_id: str | None = None,
    template: str | None = None,
) -> Path:
    """Write a stand-alone HTML page that visualizes ``tree_str``.

    Args:
        tree_str:  Tree string from ``export_tree``.  ``None`` writes a page
                   where a tree string can be entered by hand.
        output:    Destination file.
        viewer_id: Id registered with a ``ViewerRegistry``, passed on to the
                   page via ``window.setIdParam``.
        template:  HTML containing ``RENDER_PLACEHOLDER``.  Defaults to
                   ``DEFAULT_TEMPLATE``.

    Returns:
        The path that was written.
    """
    page = template if template is not None else DEFAULT_TEMPLATE
    if RENDER_PLACEHOLDER not in page:
        msg = "template does not contain the render placeholder"
        raise ValueError(msg)

    script = ""
    if viewer_id is not None:
        script += f"window.setIdParam({_script_literal(viewer_id)});"
    tree_literal = _script_literal(tree_str) if tree_str is not None else "null"
    script += f"window.renderVisualizer({tree_literal});"

    path = Path(output)
    path.write_text(page.replace(RENDER_PLACEHOLDER, script), encoding="utf-8")
    return path


def show_in_web_browser(
    tree_str: str | None,
    registry: ViewerRegistry,
    launcher: Callable[[str], object] = webbrowser.open,
    template: str | None = None,
) -> str | None:
    """Open a page visualizing ``tree_str`` in the web browser.

    Args:
        tree_str: Tree string from ``export_tree``, or None for a page where
                  one can be entered.
        registry: Registry that limits how many viewers are open at once.
        launcher: Opens a URL.  Defaults to ``webbrowser.open``.
        template: HTML template passed to ``write_html``.

    Returns:
        The viewer id to pass to ``registry.release`` later, or None if the
        registry was full and nothing was opened.

    Raises:
        OSError: If the page could not be written.  Any exception raised by
            ``launcher`` is propagated as well; the id is released first.
    """
    viewer_id = registry.acquire()
    if viewer_id is None:
        logger.debug("Viewer limit of %d reached; not opening", registry.max_open)
        return None

    try:
        with tempfile.NamedTemporaryFile(
            prefix="red_black_node_visualizer_", suffix=".html", delete=False
        ) as handle:
            path = Path(handle.name)
        write_html(tree_str, path, viewer_id=viewer_id, template=template)
        launcher(path.as_uri())
    except Exception:
        logger.warning("Could not open viewer %s", viewer_id, exc_info=True)
        registry.release(viewer_id)
        raise
    return viewer_id
