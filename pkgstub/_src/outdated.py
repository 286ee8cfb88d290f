from typing import List

from pydantic import BaseModel, ConfigDict

from pkgstub._src.index import LocalIndex, RemoteIndex
from pkgstub._src.models.version import Version


class OutdatedPackage(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    local_version: Version
    remote_version: Version

    def __str__(self):
        return f"{self.name} ({self.local_version} < {self.remote_version})"


def find_outdated(local: LocalIndex, remote: RemoteIndex) -> List[OutdatedPackage]:
    """Compare the newest installed version of each package with the newest
    published one.

    Returns
    -------
    outdated: list[OutdatedPackage]
        Packages with a newer remote release, sorted by name.
    """
    outdated = []
    for name, stub in sorted(local.latest_packages().items()):
        remote_version = remote.latest_version(name)
        if remote_version is None:
            continue
        if stub.version < remote_version:
            outdated.append(
                OutdatedPackage(
                    name=name,
                    local_version=stub.version,
                    remote_version=remote_version,
                )
            )
    return outdated
