"""Render passes and a graph that runs them in resource-dependency order."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable


class RenderResource(enum.Enum):
    """Resources that passes produce and consume."""

    CLEARED_RENDER_TARGET = enum.auto()
    FINAL_FRAME = enum.auto()


class RenderPass(ABC):
    """A unit of rendering work that records commands into a command buffer."""

    name: str = "RenderPass"

    @abstractmethod
    def execute(self, device: Any, cmd: Any) -> None:
        """Record this pass's commands into ``cmd``."""


@dataclass(frozen=True)
class _PassNode:
    render_pass: RenderPass
    inputs: tuple[RenderResource, ...]
    outputs: tuple[RenderResource, ...]


class RenderGraph:
    """Runs passes once all of their input resources have been produced."""

    def __init__(self) -> None:
        self._nodes: list[_PassNode] = []

    def add_pass(
        self,
        render_pass: RenderPass,
        inputs: Iterable[RenderResource],
        outputs: Iterable[RenderResource],
    ) -> None:
        """Add a pass together with the resources it reads and writes."""
        self._nodes.append(_PassNode(render_pass, tuple(inputs), tuple(outputs)))

    def execute(self, device: Any, cmd: Any) -> None:
        """Record every pass into ``cmd`` in dependency order.

        Passes whose inputs are ready run in the order they were added.
        Raises ValueError if some passes can never run because of a
        circular dependency or a missing input; the passes that could run
        have already been recorded by then.
        """
        remaining = list(self._nodes)
        available: set[RenderResource] = set()

        while remaining:
            waiting: list[_PassNode] = []
            progressed = False
            for node in remaining:
                if available.issuperset(node.inputs):
                    node.render_pass.execute(device, cmd)
                    available.update(node.outputs)
                    progressed = True
                else:
                    waiting.append(node)
            remaining = waiting
            if not progressed:
                names = ", ".join(f"'{node.render_pass.name}'" for node in remaining)
                raise ValueError(
                    "circular dependency or missing inputs; "
                    f"passes waiting for a resource: {names}"
                )