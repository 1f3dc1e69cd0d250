__title__ = 'flagstaff'
__author__ = 'Flagstaff contributors'
__license__ = 'MIT'
__version__ = "0.1.0"

from .faults import *
from .handles import *
from .readers import *
from .registry import *
from .storage import *
from .utils import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the submodules
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += handles.__all__  # type: ignore[attr-defined]
__all__ += readers.__all__  # type: ignore[attr-defined]
__all__ += registry.__all__  # type: ignore[attr-defined]
__all__ += storage.__all__  # type: ignore[attr-defined]
__all__ += utils.__all__  # type: ignore[attr-defined]
