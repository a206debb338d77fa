from types import SimpleNamespace

from vividrender.app import build_frame_graph
from vividrender.command_buffer import CommandBuffer, GLCommandBuffer
from vividrender.passes import ClearPass, TrianglePass
from vividrender.render_graph import RenderPass


class Recorder(CommandBuffer):
    def __init__(self):
        self.log = []

    def clear(self):
        self.log.append(("clear",))

    def draw(self, vertex_count):
        self.log.append(("draw", vertex_count))

    def bind_pipeline(self, program_id):
        self.log.append(("bind_pipeline", program_id))

    def unbind_pipeline(self):
        self.log.append(("unbind_pipeline",))

    def bind_vertex_array(self, vao):
        self.log.append(("bind_vertex_array", vao))


class NamedPass(RenderPass):
    def __init__(self, name, order):
        self.name = name
        self._order = order

    def execute(self, device, cmd):
        self._order.append(self.name)


def make_triangle_pass():
    pipeline = SimpleNamespace(program_id=7)
    vertex_buffer = SimpleNamespace(vao=11)
    return TrianglePass(pipeline, vertex_buffer)


def test_frame_graph_clears_before_drawing():
    graph = build_frame_graph(ClearPass(), make_triangle_pass())
    cmd = Recorder()
    graph.execute(None, cmd)
    assert cmd.log == [
        ("clear",),
        ("bind_pipeline", 7),
        ("bind_vertex_array", 11),
        ("draw", 3),
        ("unbind_pipeline",),
    ]


def test_frame_graph_runs_each_pass_once_per_execute():
    order = []
    graph = build_frame_graph(NamedPass("clear", order), NamedPass("triangle", order))
    graph.execute(None, Recorder())
    graph.execute(None, Recorder())
    assert order == ["clear", "triangle", "clear", "triangle"]


def test_frame_graph_records_into_gl_command_buffer():
    gl = SimpleNamespace()
    cmd = GLCommandBuffer(gl)
    build_frame_graph(ClearPass(), make_triangle_pass()).execute(None, cmd)
    assert len(cmd) == 5