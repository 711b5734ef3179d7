from simplestats.core import (
    distributions,
    exceptions,
    numeric,
    randoms,
    samplers,
    special,
    trimmed,
    univariate,
)
from simplestats.core.exceptions import *
from simplestats.core.special import *
from simplestats.core.numeric import *
from simplestats.core.randoms import *
from simplestats.core.distributions import *
from simplestats.core.trimmed import *
from simplestats.core.univariate import *
from simplestats.core.samplers import *

__all__ = (
    exceptions.__all__
    + special.__all__
    + numeric.__all__
    + randoms.__all__
    + distributions.__all__
    + trimmed.__all__
    + univariate.__all__
    + samplers.__all__
)
