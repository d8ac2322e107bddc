"""Functions for statistics/math.

This module contains the confidence interval used to call sites as
methylated or unmethylated.

Copyright © 2024 The mlevels authors.
"""

import logging
import math
from functools import lru_cache
from typing import Tuple

from scipy.stats import norm

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def normal_quantile(alpha: float) -> float:
    """Return the upper (1 - alpha/2) quantile of the standard normal distribution.

    :param alpha: the two-sided significance level
    :returns float: the z value
    """
    return float(norm.ppf(1.0 - alpha / 2.0))


def wilson_interval(alpha: float, n: int, p_hat: float) -> Tuple[float, float]:
    """Compute the Wilson score interval for a binomial proportion.

    The interval is centered on a shrunken estimate of the proportion and is
    well behaved for small number of trials and proportions close to 0 or 1,
    unlike the normal approximation. A description can be found at:
    https://en.wikipedia.org/wiki/Binomial_proportion_confidence_interval#Wilson_score_interval

    :param alpha: the two-sided significance level, in (0, 1)
    :param n: the number of trials, at least 1
    :param p_hat: the observed proportion of successes, in [0, 1]
    :raises ValueError: if `alpha` or `n` are out of range
    :returns Tuple[float, float]: the lower and upper bound, clamped to [0, 1]
    """
    if not 0.0 < alpha < 1.0:
        raise ValueError("alpha must be between 0 and 1")
    if n < 1:
        raise ValueError("the number of trials must be at least 1")

    z = normal_quantile(alpha)
    zz = z * z
    denom = 1.0 + zz / n
    center = (p_hat + zz / (2.0 * n)) / denom
    spread = z * math.sqrt(p_hat * (1.0 - p_hat) / n + zz / (4.0 * n * n)) / denom

    lower = max(center - spread, 0.0)
    upper = min(center + spread, 1.0)
    return lower, upper
