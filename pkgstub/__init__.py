from pkgstub._src.exceptions import DescriptorLoadError, ExtensionBuildFailed, InvalidSpecificationError
from pkgstub._src.index import LocalIndex, RemoteIndex
from pkgstub._src.models.platform import Platform
from pkgstub._src.models.specification import PackageSpecification
from pkgstub._src.models.version import Version
from pkgstub._src.registry import LoadedSpecs, loaded_specs
from pkgstub._src.stub_specification import ResolutionState, StubSpecification

__version__ = "0.1.0"
