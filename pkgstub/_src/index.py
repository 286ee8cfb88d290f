import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from pkgstub._src.constants import (
    DEFAULT_SPECIFICATIONS_DIR,
    DESCRIPTOR_SUFFIX,
    PACKAGES_DIR,
    SPECIFICATIONS_DIR,
)
from pkgstub._src.models.version import Version
from pkgstub._src.registry import ActivationRegistry
from pkgstub._src.stub_specification import StubSpecification


logger = logging.getLogger(__name__)


class LocalIndex():
    def __init__(self, base_dir: str | Path, registry: Optional[ActivationRegistry] = None):
        """LocalIndex lists the packages installed under `base_dir`.

        Descriptors live in `{base_dir}/specifications`, those of packages
        shipped with the runtime in `{base_dir}/specifications/default`.
        Nothing is read until the packages are asked for.
        """
        self.base_dir = Path(base_dir)
        self.packages_dir = self.base_dir / PACKAGES_DIR
        self.registry = registry
        self._stubs: Optional[List[StubSpecification]] = None

    def _descriptors(self, directory: Path) -> List[Path]:
        if not directory.is_dir():
            return []
        return sorted(directory.glob(f"*{DESCRIPTOR_SUFFIX}"))

    def stubs(self) -> List[StubSpecification]:
        """Return a stub for every valid descriptor, regular packages first.

        A default package with the same full name as an installed one is
        hidden by it.
        """
        if self._stubs is not None:
            return self._stubs

        spec_dir = self.base_dir / SPECIFICATIONS_DIR
        candidates = [
            StubSpecification.stub(path, self.base_dir, self.packages_dir, registry=self.registry)
            for path in self._descriptors(spec_dir)
        ] + [
            StubSpecification.default_stub(path, self.base_dir, self.packages_dir, registry=self.registry)
            for path in self._descriptors(spec_dir / DEFAULT_SPECIFICATIONS_DIR)
        ]

        seen = set()
        stubs = []
        for stub in candidates:
            try:
                valid = stub.is_valid()
            except OSError as err:
                logger.warning("skipping unreadable descriptor %s: %s", stub.loaded_from, err)
                continue
            if not valid:
                logger.warning("skipping invalid descriptor %s", stub.loaded_from)
                continue
            if stub.full_name in seen:
                continue
            seen.add(stub.full_name)
            stubs.append(stub)

        self._stubs = stubs
        return stubs

    def all_packages(self) -> List[StubSpecification]:
        return sorted(self.stubs(), key=lambda stub: (stub.name, stub.version))

    def find_by_name(self, name: str) -> List[StubSpecification]:
        return [stub for stub in self.all_packages() if stub.name == name]

    def latest_packages(self) -> Dict[str, StubSpecification]:
        """Return the highest installed version of each package"""
        latest: Dict[str, StubSpecification] = {}
        for stub in self.all_packages():
            current = latest.get(stub.name)
            if current is None or current.version < stub.version:
                latest[stub.name] = stub
        return latest


class RemoteIndexFile(BaseModel):
    """A published list of available versions per package"""
    packages: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("packages", mode="before")
    @classmethod
    def _versions_as_strings(cls, value):
        # unquoted yaml versions like 1.0 load as floats
        if isinstance(value, dict):
            return {name: [str(v) for v in (versions or [])] for name, versions in value.items()}
        return value


class RemoteIndex():
    def __init__(self, index: RemoteIndexFile):
        self.index = index

    @classmethod
    def from_file(cls, path: str | Path) -> "RemoteIndex":
        with open(path, 'r') as file:
            raw_index = yaml.safe_load(file) or {}

        index = RemoteIndexFile.model_validate(raw_index)
        return cls(index)

    def versions(self, name: str) -> List[Version]:
        versions = []
        for raw in self.index.packages.get(name, []):
            if not Version.is_correct(raw):
                logger.warning("ignoring malformed version %r of %s", raw, name)
                continue
            versions.append(Version(raw))
        return sorted(versions)

    def latest_version(self, name: str) -> Optional[Version]:
        """Return the newest release of `name`, prereleases excluded"""
        releases = [v for v in self.versions(name) if not v.is_prerelease]
        if not releases:
            return None
        return releases[-1]
