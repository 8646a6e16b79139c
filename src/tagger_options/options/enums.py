"""Closed value sets used by tagger options.

Member values are the integer tags stored in binary option files, so they
must never be renumbered.
"""

from enum import IntEnum


class Estimator(IntEnum):
    AVG_PERC = 0
    ML = 1


class Inference(IntEnum):
    MAP = 0
    MARGINAL = 1


class Regularization(IntEnum):
    NONE = 0
    L1 = 1
    L2 = 2
