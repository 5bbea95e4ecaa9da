[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spotifind"
version = "1.0.0"
description = "Interactive console browser for a song dataset: search by genre, artist and tempo, and build playlists"
requires-python = ">=3.10"
dependencies = []
keywords = ["music", "songs", "playlist", "csv", "console", "hashmap"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
spotifind = "spotifind.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["spotifind"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
