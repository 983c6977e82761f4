[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neostatus"
version = "0.1.0"
description = "Status-bar blocks for i3bar and i3blocks: backlight, battery, ethernet and wireless"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["i3", "i3bar", "i3blocks", "status bar", "pango", "monitoring"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Desktop Environment :: Window Managers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
neostatus-backlight = "neostatus.backlight:main"
neostatus-battery = "neostatus.battery:main"
neostatus-ethernet = "neostatus.ethernet:main"
neostatus-wireless = "neostatus.wireless:main"

[tool.hatch.build.targets.wheel]
packages = ["neostatus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
