"""Threaded OpenGL rendering: a dependency-ordered render graph, recorded command buffers and a render-thread device."""

__version__ = "0.1.0"