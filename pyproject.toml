[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdview"
version = "0.1.0"
description = "Multidimensional views over flat sequences: extents, layout mappings, mdspan-style views and owning mdarrays."
requires-python = ">=3.10"
dependencies = []
keywords = ["mdspan", "mdarray", "multidimensional", "array", "layout", "extents", "strides", "tiling"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mdview-demo = "mdview.demo:main"
mdview-tiled = "mdview.tiled:main"

[tool.hatch.build.targets.wheel]
packages = ["mdview"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
