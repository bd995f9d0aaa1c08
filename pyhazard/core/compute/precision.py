"""
Numerical precision constants and value-type utilities.

Estimators accumulate in a caller-selected numpy floating type. This
module resolves that choice.
"""

import numpy as np
from numpy.typing import DTypeLike

from pyhazard.core.exceptions import ValidationError


DEFAULT_VALUE_TYPE = np.dtype(np.float64)


def resolve_value_type(value_type: DTypeLike = None) -> np.dtype:
    """
    Resolve the numeric type estimates are accumulated in.
    
    Args:
        value_type: Any numpy floating dtype-like (np.float32, 'float64',
            np.longdouble, ...). None selects float64.
            
    Returns:
        The resolved numpy dtype
        
    Raises:
        ValidationError: If value_type is not a real floating type
    """
    if value_type is None:
        return DEFAULT_VALUE_TYPE
    try:
        dtype = np.dtype(value_type)
    except TypeError as e:
        raise ValidationError(f"value_type: not a numpy dtype: {value_type!r}") from e
    if not np.issubdtype(dtype, np.floating):
        raise ValidationError(
            f"value_type: must be a real floating type, got {dtype}"
        )
    return dtype
