[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vividrender"
version = "0.1.0"
description = "A small multithreaded OpenGL renderer with a dependency-ordered render graph and recorded command buffers"
requires-python = ">=3.10"
dependencies = [
    "pyglet",
]
keywords = ["opengl", "render graph", "command buffer", "rendering", "graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vividrender = "vividrender.app:main"

[tool.hatch.build.targets.wheel]
packages = ["vividrender"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
