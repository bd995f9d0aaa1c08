"""
Standard normal quantiles for confidence intervals.
"""

from scipy import stats

from pyhazard.core.validation import check_probability


def normal_quantile(p: float) -> float:
    """
    Quantile of the standard normal distribution.
    
    Args:
        p: Probability in (0, 1)
        
    Returns:
        z such that P(Z <= z) = p
        
    Raises:
        ValidationError: If p is outside (0, 1)
    """
    check_probability(p, "p")
    return float(stats.norm.ppf(p))
