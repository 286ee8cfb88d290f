import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from pkgstub._src.constants import (
    BUILD_COMPLETE_MARKER,
    DEFAULT_SPECIFICATIONS_DIR,
    DESCRIPTOR_ENCODING,
    DESCRIPTOR_HEADER,
    EXTENSIONS_DIR,
    EXTENSIONS_PREFIX,
    FILES_PREFIX,
    PACKAGES_DIR,
    SPECIFICATIONS_DIR,
    STUB_PREFIX,
)
from pkgstub._src.exceptions import DescriptorLoadError, ExtensionBuildFailed
from pkgstub._src.models.platform import Platform
from pkgstub._src.models.version import Version
from pkgstub._src.utils import ensure_dir


logger = logging.getLogger(__name__)


class PackageSpecification(BaseModel):
    """The complete, evaluated description of a package.

    A descriptor file is a comment block (header and stub lines) followed by
    a yaml body holding these fields.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    version: Version
    platform: Platform = Platform.RUBY
    summary: Optional[str] = None
    require_paths: List[str] = Field(default_factory=lambda: ["lib"])
    files: List[str] = Field(default_factory=list)
    extensions: List[str] = Field(default_factory=list)

    # where the descriptor lives, not part of the yaml body
    ignored: bool = Field(default=False, exclude=True)
    loaded_from: Optional[str] = Field(default=None, exclude=True)
    base_dir: Optional[str] = Field(default=None, exclude=True)
    packages_dir: Optional[str] = Field(default=None, exclude=True)

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value):
        return Version(value)

    @field_validator("platform", mode="before")
    @classmethod
    def _parse_platform(cls, value):
        return Platform.parse(value)

    @field_serializer("version", "platform")
    def _serialize_str(self, value):
        return str(value)

    @classmethod
    def load(cls, path: str | Path) -> "PackageSpecification":
        """Evaluate the descriptor at `path`.

        Raises
        ------
        DescriptorLoadError
            If the file can't be read or its body isn't a valid specification.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding=DESCRIPTOR_ENCODING)
        except (OSError, UnicodeDecodeError) as err:
            raise DescriptorLoadError(path, err) from err

        try:
            raw_spec = yaml.safe_load(_strip_comment_block(text))
        except yaml.YAMLError as err:
            raise DescriptorLoadError(path, err) from err

        if not isinstance(raw_spec, dict):
            raise DescriptorLoadError(path, "descriptor body is not a mapping")

        try:
            spec = cls.model_validate(raw_spec)
        except (ValidationError, ValueError) as err:
            raise DescriptorLoadError(path, err) from err

        base_dir = _base_dir_for(path)
        spec.loaded_from = str(path.resolve())
        spec.base_dir = str(base_dir)
        spec.packages_dir = str(base_dir / PACKAGES_DIR)
        logger.debug("evaluated descriptor %s", path)
        return spec

    @property
    def full_name(self) -> str:
        if self.platform.is_ruby:
            return f"{self.name}-{self.version}"
        return f"{self.name}-{self.version}-{self.platform}"

    @property
    def full_path(self) -> Optional[Path]:
        if self.packages_dir is None:
            return None
        return Path(self.packages_dir) / self.full_name

    @property
    def extension_dir(self) -> Optional[Path]:
        if self.base_dir is None:
            return None
        return Path(self.base_dir) / EXTENSIONS_DIR / self.full_name

    @property
    def build_complete_path(self) -> Optional[Path]:
        if self.extension_dir is None:
            return None
        return self.extension_dir / BUILD_COMPLETE_MARKER

    def missing_extensions(self) -> bool:
        if not self.extensions:
            return False
        marker = self.build_complete_path
        return marker is None or not marker.exists()

    def build_extensions(self) -> None:
        """Run every extension build script, then mark the build complete.

        Each extension is a script path relative to the package directory and
        is run with the current interpreter from inside that directory.
        """
        if not self.missing_extensions():
            return

        cwd = self.full_path
        if cwd is None:
            raise ExtensionBuildFailed([], None, f"{self.full_name} has no install location")

        for extension in self.extensions:
            command = [sys.executable, extension]
            logger.info("building extension %s for %s", extension, self.full_name)
            try:
                subprocess.run(command, cwd=cwd, check=True, capture_output=True, text=True)
            except subprocess.CalledProcessError as err:
                raise ExtensionBuildFailed(command, cwd, err.stderr or err) from err
            except OSError as err:
                raise ExtensionBuildFailed(command, cwd, err) from err

        ensure_dir(self.extension_dir)
        self.build_complete_path.touch()

    def to_stub_line(self) -> str:
        require_paths = "\0".join(self.require_paths)
        return f"{STUB_PREFIX}{self.name} {self.version} {self.platform} {require_paths}"

    def to_descriptor(self, default_package: bool = False) -> str:
        """Render a descriptor file whose stub lines match this specification."""
        lines = [DESCRIPTOR_HEADER, self.to_stub_line()]
        if self.extensions:
            lines.append(EXTENSIONS_PREFIX + "\0".join(self.extensions))
        if default_package and self.files:
            lines.append(FILES_PREFIX + "\0".join(self.files))
        body = yaml.safe_dump(self.model_dump(exclude_none=True), sort_keys=False)
        return "\n".join(lines) + "\n" + body


def _strip_comment_block(text: str) -> str:
    # stub lines carry NUL separators, which yaml refuses even inside comments
    lines = text.splitlines(keepends=True)
    index = 0
    while index < len(lines) and lines[index].startswith("#"):
        index += 1
    return "".join(lines[index:])


def _base_dir_for(path: Path) -> Path:
    parent = path.resolve().parent
    if parent.name == DEFAULT_SPECIFICATIONS_DIR and parent.parent.name == SPECIFICATIONS_DIR:
        parent = parent.parent
    if parent.name == SPECIFICATIONS_DIR:
        return parent.parent
    return parent
