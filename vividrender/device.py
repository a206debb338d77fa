"""Rendering devices: frames are recorded by the caller and played back on a render thread."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

from .command_buffer import CommandBuffer, GLCommandBuffer
from .command_queue import CommandQueue, QueueStopped
from .resources import GLResource

FRAMES_IN_FLIGHT = 2
"""Number of command buffers, so recording and playback can overlap."""

RENDER_THREAD_NAME = "vividrender-render"

_FENCE_TIMEOUT_NS = 1_000_000_000
_POLL_SECONDS = 0.05

logger = logging.getLogger(__name__)


class Device(ABC):
    """Hands out command buffers for recording and executes submitted ones."""

    @abstractmethod
    def begin_frame(self) -> CommandBuffer:
        """Return an empty command buffer once its previous contents are consumed."""

    @abstractmethod
    def end_frame(self, cmd: CommandBuffer) -> None:
        """Submit a recorded command buffer for execution."""

    @abstractmethod
    def shutdown(self) -> None:
        """Stop the device and wait for its work to end."""


class GLDevice(Device):
    """Owns a window's GL context on a dedicated render thread.

    ``window`` must provide ``switch_to()``, ``get_framebuffer_size()`` and
    ``flip()``, as a pyglet window does; ``gl`` is a GL function table such
    as ``pyglet.gl``.
    """

    def __init__(self, window: Any, gl: Any) -> None:
        self._window = window
        self._gl = gl
        self._queue: CommandQueue[GLCommandBuffer] = CommandQueue()
        self._command_buffers = [GLCommandBuffer(gl) for _ in range(FRAMES_IN_FLIGHT)]
        self._fences: list[Optional[Any]] = [None] * FRAMES_IN_FLIGHT
        self._slot_free = [threading.Event() for _ in range(FRAMES_IN_FLIGHT)]
        for event in self._slot_free:
            event.set()
        self._current_frame = 0
        self._pending: list[GLResource] = []
        self._pending_lock = threading.Lock()
        self._running = threading.Event()
        self._running.set()
        self._thread = threading.Thread(
            target=self._render_main, name=RENDER_THREAD_NAME, daemon=True
        )
        self._thread.start()

    def __enter__(self) -> GLDevice:
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    def register_resource(self, resource: GLResource) -> None:
        """Have ``resource`` initialised on the render thread before the next frame."""
        with self._pending_lock:
            self._pending.append(resource)

    def begin_frame(self) -> GLCommandBuffer:
        self._check_running()
        slot = self._current_frame
        while not self._slot_free[slot].wait(_POLL_SECONDS):
            self._check_running()

        fence = self._fences[slot]
        if fence is not None:
            gl = self._gl
            retry = (gl.GL_TIMEOUT_EXPIRED, gl.GL_WAIT_FAILED)
            while (
                gl.glClientWaitSync(fence, gl.GL_SYNC_FLUSH_COMMANDS_BIT, _FENCE_TIMEOUT_NS)
                in retry
            ):
                pass
            gl.glDeleteSync(fence)
            self._fences[slot] = None

        cmd = self._command_buffers[slot]
        cmd.reset()
        return cmd

    def end_frame(self, cmd: CommandBuffer) -> None:
        self._check_running()
        slot = self._current_frame
        if cmd is not self._command_buffers[slot]:
            raise ValueError("end_frame expects the command buffer returned by begin_frame")
        self._slot_free[slot].clear()
        self._queue.push(cmd)
        self._current_frame = (slot + 1) % FRAMES_IN_FLIGHT

    def shutdown(self) -> None:
        if not self._running.is_set():
            return
        self._running.clear()
        self._queue.stop()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def _check_running(self) -> None:
        if not self._running.is_set():
            raise RuntimeError("device has been shut down")
        if not self._thread.is_alive():
            raise RuntimeError("render thread is not running")

    def _initialize_pending(self) -> None:
        with self._pending_lock:
            pending, self._pending = self._pending, []
        for resource in pending:
            try:
                resource.initialize_gl()
            except Exception:
                logger.exception("failed to initialise %r on the render thread", resource)

    def _render_main(self) -> None:
        gl = self._gl
        try:
            self._window.switch_to()
            width, height = self._window.get_framebuffer_size()
            gl.glViewport(0, 0, width, height)
            gl.glClearColor(0.05, 0.05, 0.2, 1.0)
            gl.glEnable(gl.GL_DEPTH_TEST)
        except Exception:
            logger.exception("failed to set up the GL context on the render thread")
            return

        self._initialize_pending()

        frame_index = 0
        while self._running.is_set():
            try:
                cmd = self._queue.pop()
            except QueueStopped:
                break
            self._initialize_pending()
            cmd.execute_all()
            self._window.flip()
            self._fences[frame_index] = gl.glFenceSync(gl.GL_SYNC_GPU_COMMANDS_COMPLETE, 0)
            self._slot_free[frame_index].set()
            frame_index = (frame_index + 1) % FRAMES_IN_FLIGHT