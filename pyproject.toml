[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagechunker"
version = "0.1.0"
description = "Split the text of PDF pages into overlapping word-window chunks with page metadata."
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "chunking", "text", "sliding-window", "indexing", "retrieval"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pagechunker = "pagechunker.api:main"

[tool.hatch.build.targets.wheel]
packages = ["pagechunker"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
