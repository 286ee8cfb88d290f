import logging
from typing import Dict, Iterator, Optional, Protocol

from pkgstub._src.models.specification import PackageSpecification


logger = logging.getLogger(__name__)


class ActivationRegistry(Protocol):
    def lookup(self, name: str) -> Optional[PackageSpecification]:
        """Return the activated specification for `name`, if any."""
        ...


class LoadedSpecs:
    """Packages activated in this process, keyed by name.

    At most one version of a package is active at a time.
    """

    def __init__(self):
        self._specs: Dict[str, PackageSpecification] = {}

    def lookup(self, name: str) -> Optional[PackageSpecification]:
        return self._specs.get(name)

    def register(self, spec: PackageSpecification) -> None:
        current = self._specs.get(spec.name)
        if current is not None and current.version != spec.version:
            raise ValueError(
                f"can't activate {spec.full_name}, already activated {current.full_name}"
            )
        logger.debug("activated %s", spec.full_name)
        self._specs[spec.name] = spec

    def clear(self) -> None:
        self._specs.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[PackageSpecification]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


loaded_specs = LoadedSpecs()
