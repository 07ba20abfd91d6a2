[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osmtool"
version = "0.1.0"
description = "Geometry, ID, tag-matching and boundary-file helpers for cutting OpenStreetMap extracts"
requires-python = ">=3.10"
dependencies = []
keywords = ["openstreetmap", "osm", "extract", "polygon", "bbox", "poly", "geojson", "gis"]
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
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["osmtool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
