# vividrender

A small OpenGL renderer that records drawing work on the calling thread and
plays it back on a dedicated render thread.

Each frame is described as a render graph. Passes declare the resources they
read and the resources they produce, and the graph runs them in dependency
order. Passes record commands into a command buffer; the device hands finished
buffers to the render thread through a thread-safe queue, with two frames in
flight so that recording and rendering overlap.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running the demo

```
vividrender
vividrender --shader-dir path/to/shaders
```

This opens an 800×600 pyglet window with an OpenGL 3.3 context and draws a
single coloured triangle over a dark blue background until the window is
closed. A second, hidden 1×1 window is made current on the main thread while
the render window's context is used on the render thread.

The shader sources are read from `simple.vert` and `simple.frag` in the
directory given by `--shader-dir` (default: `shaders` relative to the working
directory). The package does not ship these files. The vertex shader receives
a `vec2` position at attribute location 0 and a `vec3` colour at attribute
location 1.

## Building a frame

```python
from pyglet import gl

from vividrender.device import GLDevice
from vividrender.passes import ClearPass, TrianglePass
from vividrender.render_graph import RenderGraph, RenderResource
from vividrender.resources import GLVertexBuffer, PipelineState

pipeline = PipelineState("shaders/simple.vert", "shaders/simple.frag", gl)
vertex_buffer = GLVertexBuffer(vertex_data, gl)   # any buffer of float32 x, y, r, g, b

with GLDevice(window, gl) as device:
    device.register_resource(pipeline)
    device.register_resource(vertex_buffer)

    graph = RenderGraph()
    graph.add_pass(ClearPass(), [], [RenderResource.CLEARED_RENDER_TARGET])
    graph.add_pass(
        TrianglePass(pipeline, vertex_buffer),
        [RenderResource.CLEARED_RENDER_TARGET],
        [RenderResource.FINAL_FRAME],
    )

    cmd = device.begin_frame()
    graph.execute(device, cmd)
    device.end_frame(cmd)
```

`vividrender.app.build_frame_graph(clear_pass, triangle_pass)` builds exactly
this two-pass graph, and `vividrender.app.TRIANGLE_VERTICES` holds the demo's
vertex data.

## Modules

- `vividrender.render_graph`: `RenderResource` (`CLEARED_RENDER_TARGET`,
  `FINAL_FRAME`), the abstract `RenderPass` with a `name` and
  `execute(device, cmd)`, and `RenderGraph` with `add_pass(render_pass,
  inputs, outputs)` and `execute(device, cmd)`. Passes whose inputs are ready
  run in the order they were added. If some passes can never run, because of
  a circular dependency or an input nobody produces, `execute` raises
  `ValueError` naming them. The passes that could run have already been
  recorded by then.
- `vividrender.command_queue`: `CommandQueue`, a blocking FIFO with `push`,
  `pop` and `stop`. Items pushed before `stop()` are still handed out. After
  that, `pop()` raises `QueueStopped`.
- `vividrender.command_buffer`: the abstract `CommandBuffer` with `clear()`,
  `draw(vertex_count)`, `bind_pipeline(program_id)`, `unbind_pipeline()` and
  `bind_vertex_array(vao)`. `GLCommandBuffer(gl)` records these calls and
  replays them in order with `execute_all()`. `reset()` discards them, and
  `len()` gives the number recorded.
- `vividrender.passes`: `ClearPass` clears colour and depth. `TrianglePass`
  binds the pipeline and the vertex array, draws three vertices and unbinds
  the program.
- `vividrender.resources`:
  - `GLResource` and `VertexBuffer` are the interfaces.
  - `GLVertexBuffer(data, gl)` uploads interleaved position/colour floats in
    `initialize_gl()`.
  - `compile_shader(path, shader_type, gl)` compiles one shader source file.
  - `PipelineState(vert_path, frag_path, gl)` links the two shaders into a
    program exposed as `program_id`.
  - Read, compile, link and validation failures raise `ShaderError`.
  - `release()` deletes the GL objects.
- `vividrender.device`: the abstract `Device` and `GLDevice(window, gl)`,
  which runs the render thread.
  - The window must provide `switch_to()`, `get_framebuffer_size()` and
    `flip()`, as a pyglet window does.
  - `register_resource()` queues a resource to be initialised on the render
    thread before the next frame it plays. An initialisation failure is
    logged, not raised.
  - `begin_frame()` waits until the frame slot's previous commands have run
    and their fence has signalled, then returns the emptied command buffer.
  - `end_frame(cmd)` submits it. A buffer other than the one just handed out
    raises `ValueError`.
  - Both raise `RuntimeError` once the device is shut down or its render
    thread has stopped.
  - `shutdown()` stops the queue and joins the thread. The device is also a
    context manager that shuts down on exit.

The `gl` argument throughout is any object with the GL entry points and
constants used, normally `pyglet.gl`.

## What it does not do

The renderer knows two resources and two passes. It has no mesh or texture
loading, no camera or transforms, no uniforms, and no window resizing after
start-up. The demo draws one fixed triangle and nothing else.