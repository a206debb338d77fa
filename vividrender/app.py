"""The demo application: a coloured triangle drawn by a threaded GL renderer."""

from __future__ import annotations

import argparse
import sys
from array import array
from pathlib import Path
from typing import Optional, Sequence

from .device import GLDevice
from .passes import ClearPass, TrianglePass
from .render_graph import RenderGraph, RenderPass, RenderResource
from .resources import GLVertexBuffer, PipelineState

# Position (x, y) followed by colour (r, g, b) for each vertex.
TRIANGLE_VERTICES = array(
    "f",
    [
        0.0, 0.5, 1.0, 0.0, 0.0,
        0.5, -0.5, 0.0, 1.0, 0.0,
        -0.5, -0.5, 0.0, 0.0, 1.0,
    ],
)


def build_frame_graph(clear_pass: RenderPass, triangle_pass: RenderPass) -> RenderGraph:
    """Build one frame's graph: clear the target, then draw the triangle on it."""
    graph = RenderGraph()
    graph.add_pass(clear_pass, (), (RenderResource.CLEARED_RENDER_TARGET,))
    graph.add_pass(
        triangle_pass,
        (RenderResource.CLEARED_RENDER_TARGET,),
        (RenderResource.FINAL_FRAME,),
    )
    return graph


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open a window and render until it is closed."""
    parser = argparse.ArgumentParser(
        prog="vividrender", description="Draw a coloured triangle with a threaded renderer."
    )
    parser.add_argument(
        "--shader-dir",
        type=Path,
        default=Path("shaders"),
        help="directory holding simple.vert and simple.frag",
    )
    args = parser.parse_args(argv)

    import pyglet
    from pyglet import gl

    config = gl.Config(
        major_version=3,
        minor_version=3,
        forward_compatible=True,
        double_buffer=True,
        depth_size=24,
    )
    try:
        render_window = pyglet.window.Window(
            800, 600, "VividRender - Shared Context", config=config
        )
    except Exception as exc:
        print(f"Failed to create render window: {exc}", file=sys.stderr)
        return 1
    try:
        loader_window = pyglet.window.Window(1, 1, "Loader", visible=False, config=config)
    except Exception as exc:
        print(f"Failed to create loader window: {exc}", file=sys.stderr)
        render_window.close()
        return 1

    loader_window.switch_to()
    print("GL context ready on the main/loader thread.")

    pipeline = PipelineState(
        args.shader_dir / "simple.vert", args.shader_dir / "simple.frag", gl
    )
    vertex_buffer = GLVertexBuffer(TRIANGLE_VERTICES, gl)
    print(f"main thread: {gl.glGetError()}")

    device = GLDevice(render_window, gl)
    device.register_resource(pipeline)
    device.register_resource(vertex_buffer)

    clear_pass = ClearPass()
    triangle_pass = TrianglePass(pipeline, vertex_buffer)

    try:
        while not render_window.has_exit:
            render_window.dispatch_events()
            graph = build_frame_graph(clear_pass, triangle_pass)
            cmd = device.begin_frame()
            graph.execute(device, cmd)
            device.end_frame(cmd)
    finally:
        device.shutdown()

    loader_window.switch_to()
    vertex_buffer.release()
    pipeline.release()
    loader_window.close()
    render_window.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())