import pytest

from vividrender.render_graph import RenderGraph, RenderPass, RenderResource

CLEARED = RenderResource.CLEARED_RENDER_TARGET
FINAL = RenderResource.FINAL_FRAME


class RecordingPass(RenderPass):
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def execute(self, device, cmd):
        self.log.append((self.name, device, cmd))


def names(log):
    return [entry[0] for entry in log]


def test_runs_in_insertion_order_when_independent():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("first", log), [], [CLEARED])
    graph.add_pass(RecordingPass("second", log), [], [FINAL])
    graph.execute("dev", "cmd")
    assert names(log) == ["first", "second"]


def test_dependent_pass_added_first_runs_after_producer():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("consumer", log), [CLEARED], [FINAL])
    graph.add_pass(RecordingPass("producer", log), [], [CLEARED])
    graph.execute(None, None)
    assert names(log) == ["producer", "consumer"]


def test_chain_resolves_in_same_sweep():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("clear", log), [], [CLEARED])
    graph.add_pass(RecordingPass("draw", log), [CLEARED], [FINAL])
    graph.add_pass(RecordingPass("post", log), [FINAL], [])
    graph.execute(None, None)
    assert names(log) == ["clear", "draw", "post"]


def test_device_and_command_buffer_are_passed_through():
    log = []
    device, cmd = object(), object()
    graph = RenderGraph()
    graph.add_pass(RecordingPass("p", log), [], [])
    graph.execute(device, cmd)
    assert log[0][1] is device
    assert log[0][2] is cmd


def test_empty_graph_records_nothing():
    graph = RenderGraph()
    cmd = []
    graph.execute(None, cmd)
    assert cmd == []


def test_graph_can_be_executed_repeatedly():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("b", log), [CLEARED], [])
    graph.add_pass(RecordingPass("a", log), [], [CLEARED])
    graph.execute(None, None)
    graph.execute(None, None)
    assert names(log) == ["a", "b", "a", "b"]


def test_missing_input_raises_after_running_ready_passes():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("ready", log), [], [CLEARED])
    graph.add_pass(RecordingPass("starved", log), [FINAL], [])
    with pytest.raises(ValueError) as excinfo:
        graph.execute(None, None)
    assert names(log) == ["ready"]
    assert "starved" in str(excinfo.value)
    assert "ready" not in str(excinfo.value)


def test_circular_dependency_raises():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("x", log), [CLEARED], [FINAL])
    graph.add_pass(RecordingPass("y", log), [FINAL], [CLEARED])
    with pytest.raises(ValueError):
        graph.execute(None, None)
    assert log == []


def test_inputs_accept_any_iterable():
    log = []
    graph = RenderGraph()
    graph.add_pass(RecordingPass("late", log), iter([CLEARED]), iter([]))
    graph.add_pass(RecordingPass("early", log), (), (CLEARED,))
    graph.execute(None, None)
    assert names(log) == ["early", "late"]


def test_render_pass_is_abstract():
    with pytest.raises(TypeError):
        RenderPass()