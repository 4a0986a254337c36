[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mapservices"
version = "0.1.0"
description = "Request building, response parsing and helpers for geocoding, geolocation and places web services"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "maps",
    "geocoding",
    "geolocation",
    "places",
    "polyline",
    "latlng",
]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mapservices"]

[tool.pytest.ini_options]
addopts = "-ra"
