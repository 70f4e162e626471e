[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledmesh"
version = "0.1.0"
description = "LED strip effects controller with Art-Net input, DMX output, scenes and a web console"
requires-python = ">=3.10"
keywords = ["led", "art-net", "artnet", "dmx", "lighting", "effects"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: aiohttp",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "aiohttp",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
ledmesh = "ledmesh.controller:main"

[tool.hatch.build.targets.wheel]
packages = ["ledmesh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
