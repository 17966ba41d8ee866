"""Resolution of URDF resource URIs to filesystem paths.

URDF meshes are referenced as `file://<path>` or `package://<pkg>/<path>`.
Package names are looked up through a pluggable service and memoized in a
PackageCache owned by whoever created the resolver.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Optional

import rospkg

logger = logging.getLogger(__name__)

FILE_PREFIX = "file://"
PACKAGE_PREFIX = "package://"

PackageLookup = Callable[[str], str]


def find_package(name: str) -> str:
    """Locate a ROS package directory from the environment.

    Search order:
        1) rospkg, which crawls ROS_PACKAGE_PATH for package manifests
        2) `<prefix>/share/<name>` for every CMAKE_PREFIX_PATH entry

    Args:
        name: Package name.

    Returns:
        The package directory, or an empty string if it was not found.
    """
    # A fresh RosPack picks up the current ROS_PACKAGE_PATH
    try:
        return rospkg.RosPack().get_path(name)
    except rospkg.ResourceNotFound:
        logger.debug("rospkg could not find package [%s]", name)

    for entry in os.environ.get("CMAKE_PREFIX_PATH", "").split(os.pathsep):
        if not entry:
            continue
        share_dir = Path(entry) / "share" / name
        if share_dir.is_dir():
            return str(share_dir)

    return ""


class PackageCache:
    """Package name to package path memo.

    Misses are cached too (as empty strings), so an unknown package is only
    looked up once for the lifetime of the cache.
    """

    def __init__(self):
        self._paths: Dict[str, str] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def get(self, name: str, lookup: PackageLookup) -> str:
        if name in self._paths:
            logger.debug("Package cache hit for [%s]", name)
            return self._paths[name]
        path = lookup(name) or ""
        self._paths[name] = path
        return path


class URIResolver:
    """Turns `file://` and `package://` URIs into paths.

    Resolution never raises. An unresolvable URI logs a warning and yields an
    empty string, which callers must treat as "no file".
    """

    def __init__(self, lookup: Optional[PackageLookup] = None,
                 cache: Optional[PackageCache] = None):
        self.lookup = lookup if lookup is not None else find_package
        self.cache = cache if cache is not None else PackageCache()

    def resolve(self, uri: str) -> str:
        if uri.startswith(FILE_PREFIX):
            return os.path.normpath(uri[len(FILE_PREFIX):])

        if uri.startswith(PACKAGE_PREFIX):
            package, _, relative = uri[len(PACKAGE_PREFIX):].partition("/")
            package_path = self.cache.get(package, self.lookup)
            if not package_path:
                logger.warning("Unable to find package [%s].", package)
                return ""
            return os.path.normpath(os.path.join(package_path, relative))

        logger.warning("Cannot handle mesh URI type [%s].", uri)
        return ""
