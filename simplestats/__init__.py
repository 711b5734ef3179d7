from simplestats.core import *
from simplestats.core import __all__ as _core_all

__version__ = "0.1.0"

__all__ = list(_core_all)
