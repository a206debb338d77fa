"""The concrete passes: clearing the target and drawing a triangle."""

from __future__ import annotations

from typing import Any

from .command_buffer import CommandBuffer
from .render_graph import RenderPass


class ClearPass(RenderPass):
    """Clears the render target; needs no inputs."""

    name = "ClearPass"

    def execute(self, device: Any, cmd: CommandBuffer) -> None:
        cmd.clear()


class TrianglePass(RenderPass):
    """Draws one triangle with a pipeline and a vertex buffer."""

    name = "TrianglePass"

    def __init__(self, pipeline: Any, vertex_buffer: Any) -> None:
        self.pipeline = pipeline
        self.vertex_buffer = vertex_buffer

    def execute(self, device: Any, cmd: CommandBuffer) -> None:
        cmd.bind_pipeline(self.pipeline.program_id)
        cmd.bind_vertex_array(self.vertex_buffer.vao)
        cmd.draw(3)
        cmd.unbind_pipeline()