"""Live render window using Taichi GGUI.

The RenderWindow shows a RenderTarget while it is being filled: hook its
row_callback() into render_scene() and the window refreshes after every
finished row, so the image builds up from the top. When the render is done
the window can be held open for a short pause.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from csgtrace.core.render import render_scene
    >>> from csgtrace.core.render_target import RenderTarget
    >>> from csgtrace.preview.interactive import RenderWindow
    >>>
    >>> target = RenderTarget(800, 600)
    >>> window = RenderWindow(target)
    >>> render_scene(scene, target, callback=window.row_callback())
    >>> window.pause(5.0)
"""

import os
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import taichi as ti

if TYPE_CHECKING:
    from csgtrace.core.render_target import RenderTarget


# Built on first use, after ti.init() has run
_copy_flipped_kernel: Any = None


def _get_copy_flipped_kernel() -> Any:
    """Get or create the kernel copying a top-down buffer into a window image.

    GGUI canvases put y = 0 at the bottom, render targets at the top.
    """
    global _copy_flipped_kernel
    if _copy_flipped_kernel is None:

        @ti.kernel
        def _kernel(src: ti.template(), dst: ti.template(), height: ti.i32):
            for i, j in src:
                dst[i, height - 1 - j] = src[i, j]

        _copy_flipped_kernel = _kernel
    return _copy_flipped_kernel


class RenderWindow:
    """Taichi GGUI window mirroring a RenderTarget.

    Attributes:
        target: The render target being displayed.
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field holding the window image (y up).
    """

    def __init__(self, target: "RenderTarget", *, title: str = "Render") -> None:
        """Set up the window for a render target.

        The window itself is created on first use so that headless checks
        can run before any GUI is opened.

        Args:
            target: The render target to display.
            title: Window title.
        """
        self.target = target
        self.width = target.width
        self.height = target.height
        self._title = title
        self._is_initialized = False

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(self.width, self.height)
        )

    def _initialize_window(self) -> None:
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """The GGUI window, opened on first access."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Canvas of the GGUI window."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    def update_image(self) -> None:
        """Copy the current render target contents into the window image."""
        kernel = _get_copy_flipped_kernel()
        kernel(self.target.field, self.display_image, self.height)

    def is_running(self) -> bool:
        """Check if the window is still open."""
        return self.window.running

    def show_frame(self) -> None:
        """Present the window image as one frame."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def refresh(self) -> None:
        """Copy the render target into the window and present it."""
        if self._window is not None and not self._window.running:
            return
        self.update_image()
        self.show_frame()

    def row_callback(self) -> Callable[[int, int], None]:
        """Progress callback for render_scene that refreshes after each row."""

        def _on_row(rows_done: int, total_rows: int) -> None:
            self.refresh()

        return _on_row

    def pause(self, seconds: float) -> None:
        """Keep the window open for a while, or until it is closed.

        Args:
            seconds: How long to keep showing the finished image.
        """
        deadline = time.monotonic() + seconds
        self.update_image()
        while self.is_running() and time.monotonic() < deadline:
            self.show_frame()

    def close(self) -> None:
        """Close the window. It cannot be reopened."""
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Whether a GGUI window can be opened on this machine.

        Windows is assumed to always have a desktop. On macOS only an SSH
        session without X forwarding is headless. Elsewhere DISPLAY or
        WAYLAND_DISPLAY must be set.
        """
        if os.name == "nt":
            return True

        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            return not (ssh_connection and not display)

        return bool(display or wayland)
