[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mitpair"
version = "0.1.0"
description = "Pair and mob programming helpers for git: saved authors, expiring co-author and relates-to settings, and hook installation"
requires-python = ">=3.11"
keywords = ["git", "pairing", "mob-programming", "co-authored-by", "commit", "hooks"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = [
    "pyyaml",
    "tomli-w",
    "rich",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
git-mit = "mitpair.git_mit:main"
git-mit-relates-to = "mitpair.relates_to_cli:main"
git-mit-install = "mitpair.install:main"
git-mit-config = "mitpair.config_cli:main"
mit-pre-commit = "mitpair.pre_commit:main"

[tool.hatch.build.targets.wheel]
packages = ["mitpair"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
