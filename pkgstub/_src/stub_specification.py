import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from pkgstub._src.constants import BUILD_COMPLETE_MARKER, DESCRIPTOR_ENCODING, EXTENSIONS_DIR
from pkgstub._src.exceptions import DescriptorLoadError, InvalidSpecificationError
from pkgstub._src.lineno import preserved_lineno
from pkgstub._src.models.platform import Platform
from pkgstub._src.models.specification import PackageSpecification
from pkgstub._src.models.version import Version
from pkgstub._src.registry import ActivationRegistry, loaded_specs
from pkgstub._src.stub_line import StubLine, read_stub_line


logger = logging.getLogger(__name__)


Loader = Callable[[str], PackageSpecification]


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    STUBBED = "stubbed"
    FULL = "full"
    INVALID = "invalid"


class StubSpecification:
    @classmethod
    def default_stub(cls, filename, base_dir, packages_dir, **kwargs):
        return cls(filename, base_dir, packages_dir, default_package=True, **kwargs)

    @classmethod
    def stub(cls, filename, base_dir, packages_dir, **kwargs):
        return cls(filename, base_dir, packages_dir, default_package=False, **kwargs)

    def __init__(
        self,
        filename: Union[str, Path],
        base_dir: Union[str, Path],
        packages_dir: Union[str, Path],
        default_package: bool = False,
        registry: Optional[ActivationRegistry] = None,
        loader: Optional[Loader] = None,
    ):
        """StubSpecification stands in for the package described by
        `filename`, reading only its stub lines until something needs the
        fully evaluated descriptor.

        Construction does no I/O.

        Parameters
        ----------
        filename: str | Path
            Path to the descriptor file
        base_dir: str | Path
            The installation root the descriptor belongs to
        packages_dir: str | Path
            Directory holding the unpacked packages of `base_dir`
        default_package: bool
            True for packages shipped with the runtime. Only these may list
            their files in a stub line.
        registry: ActivationRegistry
            Where activated packages are looked up, defaults to the
            process wide `loaded_specs`
        loader: Callable
            Fully evaluates a descriptor, defaults to `PackageSpecification.load`
        """
        self.loaded_from = str(Path(filename).absolute())
        self.base_dir = str(base_dir)
        self.packages_dir = str(packages_dir)
        self.ignored = False

        self._default_package = default_package
        self._registry = registry if registry is not None else loaded_specs
        self._loader = loader if loader is not None else PackageSpecification.load

        self._state = ResolutionState.UNRESOLVED
        self._data: Optional[Union[StubLine, PackageSpecification]] = None
        self._spec: Optional[PackageSpecification] = None
        self._activated: Optional[bool] = None

    def resolve(self) -> Optional[Union[StubLine, PackageSpecification]]:
        """Read the stub lines, falling back to full evaluation without them.

        Runs at most once. Returns None when the descriptor could not be
        evaluated.
        """
        if self._state is not ResolutionState.UNRESOLVED:
            return self._data

        with preserved_lineno():
            try:
                with open(
                    self.loaded_from, "r", encoding=DESCRIPTOR_ENCODING, errors="surrogateescape"
                ) as file:
                    stub = read_stub_line(file, default_package=self._default_package)
            except OSError:
                self._state = ResolutionState.INVALID
                logger.warning("unable to read descriptor %s", self.loaded_from)
                raise

        if stub is not None:
            self._data = stub
            self._state = ResolutionState.STUBBED
            return self._data

        logger.debug("no stub line in %s, evaluating it", self.loaded_from)
        try:
            self._spec = self._loader(self.loaded_from)
            self._spec.ignored = self.ignored
            self._data = self._spec
            self._state = ResolutionState.FULL
        except DescriptorLoadError as err:
            logger.warning("invalid descriptor %s: %s", self.loaded_from, err)
            self._state = ResolutionState.INVALID
        return self._data

    def _metadata(self) -> Union[StubLine, PackageSpecification]:
        self.resolve()
        if self._state is ResolutionState.INVALID:
            raise InvalidSpecificationError(self.loaded_from)
        return self._data

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def name(self) -> str:
        return self._metadata().name

    @property
    def version(self) -> Version:
        return self._metadata().version

    @property
    def platform(self) -> Platform:
        return self._metadata().platform

    @property
    def full_name(self) -> str:
        return self._metadata().full_name

    @property
    def require_paths(self) -> Sequence[str]:
        return self._metadata().require_paths

    @property
    def extensions(self) -> Sequence[str]:
        return self._metadata().extensions

    @property
    def files(self) -> Sequence[str]:
        data = self._metadata()
        if self._default_package and self._state is ResolutionState.STUBBED and data.files:
            return data.files
        return self.to_full_metadata().files

    @property
    def is_default_package(self) -> bool:
        return self._default_package

    @property
    def full_path(self) -> Path:
        return Path(self.packages_dir) / self.full_name

    @property
    def full_require_paths(self) -> list[Path]:
        return [self.full_path / path for path in self.require_paths]

    @property
    def extension_dir(self) -> Path:
        return Path(self.base_dir) / EXTENSIONS_DIR / self.full_name

    @property
    def build_complete_path(self) -> Path:
        return self.extension_dir / BUILD_COMPLETE_MARKER

    def is_valid(self) -> bool:
        """Is there a stub line, or does the descriptor evaluate?"""
        self.resolve()
        return self._state in (ResolutionState.STUBBED, ResolutionState.FULL)

    def is_stubbed(self) -> bool:
        """Is there a stub line present for this descriptor?"""
        self.resolve()
        return self._state is ResolutionState.STUBBED

    def is_activated(self) -> bool:
        """True when this exact version is the one activated for its name"""
        if self._activated is None:
            loaded = self._registry.lookup(self.name)
            self._activated = loaded is not None and loaded.version == self.version
        return self._activated

    def has_missing_extensions(self) -> bool:
        if self._default_package:
            return False
        if not self.extensions:
            return False
        if self.build_complete_path.exists():
            return False
        return self.to_full_metadata().missing_extensions()

    def build_extensions(self) -> None:
        if self._default_package:
            return
        if not self.extensions:
            return
        self.to_full_metadata().build_extensions()

    def to_full_metadata(self) -> PackageSpecification:
        """The fully evaluated specification for this package.

        A stubbed package that is already activated reuses the activated
        specification instead of evaluating the descriptor again.

        Raises
        ------
        DescriptorLoadError
            If the descriptor can't be evaluated.
        """
        if self._state is ResolutionState.UNRESOLVED:
            self.resolve()

        if self._spec is None and self._state is ResolutionState.STUBBED:
            loaded = self._registry.lookup(self._data.name)
            if loaded is not None and loaded.version == self._data.version:
                self._spec = loaded

        if self._spec is None:
            self._spec = self._loader(self.loaded_from)

        self._spec.ignored = self.ignored
        return self._spec

    def __repr__(self) -> str:
        if self._state in (ResolutionState.STUBBED, ResolutionState.FULL):
            return f"<StubSpecification {self._data.full_name} ({self._state.value})>"
        return f"<StubSpecification {self.loaded_from} ({self._state.value})>"
