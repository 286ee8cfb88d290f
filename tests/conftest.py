from pathlib import Path

import pytest
import yaml

from pkgstub._src.models.specification import PackageSpecification
from pkgstub._src.registry import LoadedSpecs


HEADER = "# -*- encoding: utf-8 -*-"


def write_descriptor(path: Path, lines: list[str], body: dict | None = None) -> Path:
    """Write a descriptor made of raw comment lines followed by a yaml body"""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = "\n".join(lines) + "\n"
    if body is not None:
        text += yaml.safe_dump(body, sort_keys=False)
    path.write_text(text, encoding="utf-8")
    return path


def install(base_dir: Path, spec: PackageSpecification, default_package: bool = False) -> Path:
    """Install `spec`'s descriptor under `base_dir` the way an installer would"""
    spec_dir = base_dir / "specifications"
    if default_package:
        spec_dir = spec_dir / "default"
    spec_dir.mkdir(parents=True, exist_ok=True)
    path = spec_dir / f"{spec.full_name}.spec"
    path.write_text(spec.to_descriptor(default_package=default_package), encoding="utf-8")
    return path


class CountingLoader:
    """Wraps PackageSpecification.load and counts evaluations"""

    def __init__(self):
        self.calls = 0

    def __call__(self, path):
        self.calls += 1
        return PackageSpecification.load(path)


@pytest.fixture
def registry() -> LoadedSpecs:
    return LoadedSpecs()


@pytest.fixture
def loader() -> CountingLoader:
    return CountingLoader()


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    base = tmp_path / "home"
    (base / "specifications").mkdir(parents=True)
    return base
