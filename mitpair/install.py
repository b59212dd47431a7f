"""The ``git mit-install`` command: link the mit hooks into a repository."""

from __future__ import annotations

import argparse
import os
import shutil
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mitpair.console import Shell, report_error, success
from mitpair.errors import ExistingHook, ExistingSymlink, GitConfigError, MitError
from mitpair.git_mit import print_completions
from mitpair.vcs import GitConfig

PROG = "git-mit-install"
HOOKS = ("prepare-commit-msg", "pre-commit", "commit-msg")

_LOCAL_TIP = """\
Optionally you can install git-mit for all new "git clone" and "git init" commands

git mit-install --scope=global
"""

_PAIRING_TIP = """\
git mit-config mit set bt "Billie Thompson" billie@example.com
git mit-config mit set se "Someone Else" someone@example.com

To add multiple users to your commit run. Remember to include yourself!

git mit bt se

Optionally you can also add a issue number by running

git mit-relates-to "[#134]"

When you can use the "-m" flag or your editor, both work as normal

git commit -m "Your message"

The authors and issue number appear on the commit. These authors are saved into your current repository for ad-hoc pairing. When you're ready make the authors everywhere run

mkdir -p "$HOME/.config/git-mit"
git mit-config mit generate > "$HOME/.config/git-mit/mit.toml"
"""


class Scope(Enum):
    """Where the hooks are installed."""

    GLOBAL = "global"
    LOCAL = "local"

    def is_global(self) -> bool:
        return self is Scope.GLOBAL


@dataclass
class InstallArgs:
    """The options given to ``git mit-install``."""

    scope: Scope = Scope.LOCAL
    completion: Shell | None = None


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for ``git mit-install``."""
    parser = argparse.ArgumentParser(
        prog=PROG, description="Install git-mit into a repository"
    )
    parser.add_argument(
        "-s", "--scope", choices=["local", "global"], default="local"
    )
    parser.add_argument("--completion", type=Shell.parse, choices=list(Shell))
    return parser


def parse_args(argv: list[str] | None = None) -> InstallArgs:
    """Parse the command line."""
    namespace = build_parser().parse_args(argv)
    scope = Scope.GLOBAL if namespace.scope == "global" else Scope.LOCAL
    return InstallArgs(scope=scope, completion=namespace.completion)


def _suffix() -> str:
    return ".exe" if os.name == "nt" else ""


def _global_hooks_dir() -> Path:
    store = GitConfig.global_config()
    try:
        configured = store.get_str("init.templatedir")
    except GitConfigError:
        configured = None
    if configured:
        template_dir = Path(os.path.expanduser(configured))
    else:
        template_dir = Path.home() / ".config" / "git" / "init-template"
        store.set_str("init.templatedir", str(template_dir))
    hooks = template_dir / "hooks"
    try:
        hooks.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise MitError(f"failed to create {hooks}") from exc
    return hooks


def create_hooks_dir(is_global: bool, cwd: str | Path | None = None) -> Path:
    """Find, and create if missing, the directory the hooks go in."""
    if is_global:
        hooks = _global_hooks_dir()
    else:
        git_dir = GitConfig.discover(Path.cwd() if cwd is None else Path(cwd)).git_dir
        if git_dir is None:
            raise GitConfigError(
                "unable to discover git repository", "is the directory a git repository"
            )
        hooks = git_dir / "hooks"
    if not hooks.exists():
        try:
            hooks.mkdir()
        except OSError as exc:
            raise MitError(f"failed to create {hooks}") from exc
    return hooks


def link_hook(
    hooks_dir: str | Path, hook_name: str, binary_path: str | Path | None = None
) -> Path:
    """Symlink the mit binary for ``hook_name`` into ``hooks_dir``."""
    suffix = _suffix()
    if binary_path is None:
        binary_name = f"mit-{hook_name}{suffix}"
        found = shutil.which(binary_name)
        if found is None:
            raise MitError(f"could not find {binary_name} on the PATH")
        binary_path = found
    install_path = Path(hooks_dir) / f"{hook_name}{suffix}"

    if install_path.is_symlink():
        try:
            target = Path(os.readlink(install_path)).resolve(strict=True)
        except (OSError, RuntimeError):
            target = None
        if target == install_path:
            return install_path

    if install_path.exists():
        if install_path.is_symlink():
            raise ExistingSymlink(str(install_path), os.readlink(install_path))
        raise ExistingHook(str(install_path))

    try:
        os.symlink(binary_path, install_path)
    except OSError as exc:
        raise MitError(f"failed to link {install_path}") from exc
    return install_path


def _run(args: InstallArgs) -> None:
    hooks = create_hooks_dir(args.scope.is_global(), Path.cwd())
    for hook in HOOKS:
        link_hook(hooks, hook)

    if args.scope.is_global():
        success(
            "git-mit will be added for newly created or cloned repositories",
            'inside existing repositories run "git init" to set them up',
        )
    else:
        success("git-mit is setup for the current repository", _LOCAL_TIP)
    success("Adding your first pairing partners", _PAIRING_TIP)


def main(argv: list[str] | None = None) -> int:
    """Run ``git mit-install``."""
    args = parse_args(argv)
    if args.completion is not None:
        print_completions(build_parser(), args.completion)
        return 0
    try:
        _run(args)
    except MitError as error:
        report_error(error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())