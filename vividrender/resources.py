"""GL resources created on the render thread: vertex buffers, shaders and pipelines."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional

_FLOAT_SIZE = struct.calcsize("f")
# Each vertex is position (x, y) followed by colour (r, g, b).
_VERTEX_STRIDE = 5 * _FLOAT_SIZE
_COLOR_OFFSET = 2 * _FLOAT_SIZE


class ShaderError(Exception):
    """Raised when a shader cannot be read, compiled, linked or validated."""


class GLResource(ABC):
    """An object whose GL objects are created on the thread owning the context."""

    @abstractmethod
    def initialize_gl(self) -> None:
        """Create the GL objects; a GL context must be current."""


class VertexBuffer(ABC):
    """Vertex data that can be bound for drawing."""

    @property
    @abstractmethod
    def vao(self) -> int:
        """The vertex array object to bind, or 0 before initialisation."""


def _generate_name(gl: Any, generate: Callable[..., Any]) -> int:
    name = gl.GLuint()
    generate(1, name)
    return name.value


def _delete_name(gl: Any, delete: Callable[..., Any], name: int) -> None:
    delete(1, gl.GLuint(name))


def _get_int(gl: Any, getter: Callable[..., Any], obj: int, pname: int) -> int:
    value = gl.GLint()
    getter(obj, pname, value)
    return value.value


def _info_log(gl: Any, get_iv: Callable[..., Any], get_log: Callable[..., Any], obj: int) -> str:
    length = _get_int(gl, get_iv, obj, gl.GL_INFO_LOG_LENGTH)
    buffer = (gl.GLchar * max(length, 1))()
    get_log(obj, length, None, buffer)
    return bytes(buffer).split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _source_strings(gl: Any, source: bytes) -> tuple[Any, Any]:
    """Build the one-element string array that glShaderSource expects.

    The character buffer is returned as well so it outlives the call.
    """
    terminated = source + b"\0"
    text = (gl.GLchar * len(terminated)).from_buffer_copy(terminated)
    char_pointer = gl.glShaderSource.argtypes[2]._type_
    return (char_pointer * 1)(text), text


class GLVertexBuffer(VertexBuffer, GLResource):
    """Interleaved position/colour vertices kept on the CPU until uploaded."""

    def __init__(self, data: Any, gl: Any) -> None:
        self._gl = gl
        self._cpu_data = memoryview(data).tobytes()
        self._size = len(self._cpu_data)
        self._vao = 0
        self._vbo = 0

    @property
    def size(self) -> int:
        """Size of the vertex data in bytes."""
        return self._size

    @property
    def vao(self) -> int:
        return self._vao

    @property
    def vbo(self) -> int:
        """The buffer object holding the vertices, or 0 before initialisation."""
        return self._vbo

    def initialize_gl(self) -> None:
        gl = self._gl
        self._vao = _generate_name(gl, gl.glGenVertexArrays)
        self._vbo = _generate_name(gl, gl.glGenBuffers)
        gl.glBindVertexArray(self._vao)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, self._size, self._cpu_data, gl.GL_STATIC_DRAW)

        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(0, 2, gl.GL_FLOAT, gl.GL_FALSE, _VERTEX_STRIDE, 0)
        gl.glEnableVertexAttribArray(1)
        gl.glVertexAttribPointer(1, 3, gl.GL_FLOAT, gl.GL_FALSE, _VERTEX_STRIDE, _COLOR_OFFSET)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)
        gl.glBindVertexArray(0)

        self._cpu_data = b""

    def release(self) -> None:
        """Delete the GL objects; a GL context sharing them must be current."""
        if self._vbo:
            _delete_name(self._gl, self._gl.glDeleteBuffers, self._vbo)
            self._vbo = 0
        if self._vao:
            _delete_name(self._gl, self._gl.glDeleteVertexArrays, self._vao)
            self._vao = 0


def compile_shader(path: str | Path, shader_type: int, gl: Any) -> int:
    """Read a shader source file and compile it, returning the shader name."""
    try:
        source = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ShaderError(f"Failed to open shader file: {path}") from exc

    shader = gl.glCreateShader(shader_type)
    strings, _text = _source_strings(gl, source.encode("utf-8"))
    gl.glShaderSource(shader, 1, strings, None)
    gl.glCompileShader(shader)

    if _get_int(gl, gl.glGetShaderiv, shader, gl.GL_COMPILE_STATUS) != gl.GL_TRUE:
        log = _info_log(gl, gl.glGetShaderiv, gl.glGetShaderInfoLog, shader)
        gl.glDeleteShader(shader)
        raise ShaderError(f"Shader compile error ({path}):\n{log}")
    return shader


class PipelineState(GLResource):
    """A shader program built from a vertex and a fragment shader file."""

    def __init__(self, vert_path: str | Path, frag_path: str | Path, gl: Any) -> None:
        self._vert_path = vert_path
        self._frag_path = frag_path
        self._gl = gl
        self._program_id = 0

    @property
    def program_id(self) -> int:
        """The linked program, or 0 if none has been built."""
        return self._program_id

    def initialize_gl(self) -> None:
        gl = self._gl
        vert = compile_shader(self._vert_path, gl.GL_VERTEX_SHADER, gl)
        try:
            frag = compile_shader(self._frag_path, gl.GL_FRAGMENT_SHADER, gl)
        except ShaderError:
            gl.glDeleteShader(vert)
            raise

        program = gl.glCreateProgram()
        gl.glAttachShader(program, vert)
        gl.glAttachShader(program, frag)
        try:
            error = self._link_error(program)
        finally:
            for shader in (vert, frag):
                gl.glDetachShader(program, shader)
                gl.glDeleteShader(shader)

        if error is not None:
            gl.glDeleteProgram(program)
            self._program_id = 0
            raise ShaderError(error)
        self._program_id = program

    def _link_error(self, program: int) -> Optional[str]:
        gl = self._gl
        gl.glLinkProgram(program)
        if _get_int(gl, gl.glGetProgramiv, program, gl.GL_LINK_STATUS) != gl.GL_TRUE:
            log = _info_log(gl, gl.glGetProgramiv, gl.glGetProgramInfoLog, program)
            return f"Program link error:\n{log}"

        gl.glValidateProgram(program)
        if _get_int(gl, gl.glGetProgramiv, program, gl.GL_VALIDATE_STATUS) != gl.GL_TRUE:
            log = _info_log(gl, gl.glGetProgramiv, gl.glGetProgramInfoLog, program)
            return f"Program validation error:\n{log}"
        return None

    def release(self) -> None:
        """Delete the program; a GL context sharing it must be current."""
        if self._program_id:
            self._gl.glDeleteProgram(self._program_id)
            self._program_id = 0