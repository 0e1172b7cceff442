"""Generate new presenter modules from a template."""

import keyword
import re
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import List, Union

from .utils.errors import PresenterExistsError, ScaffoldError
from .utils.logging import get_logger

logger = get_logger("scaffold")

PRESENTER_TEMPLATE = Template('''"""${class_name} presenter."""

from flexible_presenter import FlexiblePresenter


class ${class_name}(FlexiblePresenter):

    def values(self):
        return {
            "id": self.id,
        }
''')

_CLASS_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class PresenterTarget:
    """Where a generated presenter goes."""
    class_name: str
    package: str
    path: Path


def snake_case(name: str) -> str:
    """PostPresenter -> post_presenter"""
    name = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


def resolve_target(name: str, base_dir: Union[str, Path], namespace: str) -> PresenterTarget:
    """
    Work out the module path for a presenter name.

    ``PostPresenter`` goes to ``<base_dir>/<namespace>/post_presenter.py``;
    ``Blog/PostPresenter`` goes to ``<base_dir>/blog/post_presenter.py``.

    Raises:
        ScaffoldError: If the class or folder names are not valid identifiers
    """
    parts = [part for part in re.split(r"[/\\]", name.strip()) if part]
    if not parts:
        raise ScaffoldError("Presenter name must not be empty")

    class_name = parts[-1]
    if not _CLASS_NAME.match(class_name) or keyword.iskeyword(class_name):
        raise ScaffoldError(f"'{class_name}' is not a valid class name")

    if len(parts) > 1:
        folders = [snake_case(part) for part in parts[:-1]]
    else:
        folders = [part for part in namespace.split(".") if part]

    for folder in folders:
        if not folder.isidentifier() or keyword.iskeyword(folder):
            raise ScaffoldError(f"'{folder}' is not a valid package name")

    base_dir = Path(base_dir)
    package_dir = base_dir.joinpath(*folders)
    package = ".".join([base_dir.name, *folders]) if base_dir.name else ".".join(folders)

    return PresenterTarget(
        class_name=class_name,
        package=package,
        path=package_dir / f"{snake_case(class_name)}.py",
    )


def render_presenter(class_name: str) -> str:
    """Render the source of a new presenter class."""
    return PRESENTER_TEMPLATE.substitute(class_name=class_name)


def generate_presenter(
    name: str,
    base_dir: Union[str, Path] = "app",
    namespace: str = "presenters",
    force: bool = False,
) -> PresenterTarget:
    """
    Write a new presenter module.

    Args:
        name: Class name, optionally prefixed with folders (Blog/PostPresenter)
        base_dir: Directory the presenter packages live under
        namespace: Package used when ``name`` has no folder prefix
        force: Overwrite an existing module

    Returns:
        The resolved target

    Raises:
        PresenterExistsError: If the module exists and ``force`` is not set
        ScaffoldError: If the name is invalid or the file cannot be written
    """
    target = resolve_target(name, base_dir, namespace)

    if target.path.exists() and not force:
        raise PresenterExistsError(f"Presenter already exists: {target.path}")

    try:
        for package_dir in _missing_packages(Path(base_dir), target.path.parent):
            package_dir.mkdir(parents=True, exist_ok=True)
            (package_dir / "__init__.py").touch()
        target.path.parent.mkdir(parents=True, exist_ok=True)
        target.path.write_text(render_presenter(target.class_name), encoding="utf-8")
    except OSError as e:
        raise ScaffoldError(f"Failed to write presenter {target.path}: {e}") from e

    logger.info(f"Generated {target.class_name} at {target.path}")
    return target


def _missing_packages(base_dir: Path, package_dir: Path) -> List[Path]:
    """Package directories from base_dir down to package_dir lacking __init__.py."""
    relative = package_dir.relative_to(base_dir)
    current = base_dir
    missing = []
    for part in relative.parts:
        current = current / part
        if not (current / "__init__.py").exists():
            missing.append(current)
    return missing
