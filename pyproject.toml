[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raftquorum"
version = "0.1.0"
description = "Raft quorum arithmetic: majority and joint configurations, vote tallying, commit index computation and the unstable log."
requires-python = ">=3.10"
dependencies = []
keywords = ["raft", "consensus", "quorum", "joint-consensus", "distributed-systems"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raftquorum"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
