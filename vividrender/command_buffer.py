"""Command buffers that record GL calls for later playback."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class CommandBuffer(ABC):
    """Records rendering commands for one frame."""

    @abstractmethod
    def clear(self) -> None:
        """Clear the colour and depth targets."""

    @abstractmethod
    def draw(self, vertex_count: int) -> None:
        """Draw ``vertex_count`` vertices as triangles."""

    @abstractmethod
    def bind_pipeline(self, program_id: int) -> None:
        """Use the given shader program."""

    @abstractmethod
    def unbind_pipeline(self) -> None:
        """Stop using any shader program."""

    @abstractmethod
    def bind_vertex_array(self, vao: int) -> None:
        """Bind the given vertex array object."""


class GLCommandBuffer(CommandBuffer):
    """Records calls against a GL function table and replays them on demand.

    ``gl`` is any object exposing the GL entry points and constants used here,
    such as ``pyglet.gl``.
    """

    def __init__(self, gl: Any) -> None:
        self._gl = gl
        self._commands: list[Callable[[], None]] = []

    def clear(self) -> None:
        gl = self._gl
        self._commands.append(
            lambda: gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        )

    def draw(self, vertex_count: int) -> None:
        gl = self._gl
        self._commands.append(lambda: gl.glDrawArrays(gl.GL_TRIANGLES, 0, vertex_count))

    def bind_pipeline(self, program_id: int) -> None:
        gl = self._gl
        self._commands.append(lambda: gl.glUseProgram(program_id))

    def unbind_pipeline(self) -> None:
        gl = self._gl
        self._commands.append(lambda: gl.glUseProgram(0))

    def bind_vertex_array(self, vao: int) -> None:
        gl = self._gl
        self._commands.append(lambda: gl.glBindVertexArray(vao))

    def execute_all(self) -> None:
        """Run every recorded command in recording order."""
        for command in self._commands:
            command()

    def reset(self) -> None:
        """Discard all recorded commands."""
        self._commands.clear()

    def __len__(self) -> int:
        return len(self._commands)