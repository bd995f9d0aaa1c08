"""
Input validation utilities for PyHazard.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Time values keep the dtype the caller gave them
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyhazard.core.exceptions import ValidationError, DimensionError


def _as_array(array: ArrayLike, name: str) -> NDArray[Any]:
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )
    return result


def check_time_array(array: ArrayLike, name: str) -> NDArray[Any]:
    """
    Validate and convert time values to a numpy array.
    
    Accepts integer, floating, datetime64 and timedelta64 data and keeps
    the original dtype so the fitted event table reports times in the
    caller's own unit. Booleans, strings and object arrays are rejected.
    
    Args:
        array: Input to validate
        name: Parameter name for error messages
        
    Returns:
        numpy.ndarray with the input's dtype
        
    Raises:
        ValidationError: If input is not a usable time array
    """
    result = _as_array(array, name)

    if result.dtype == np.bool_:
        raise ValidationError(f"{name}: boolean dtype is not a valid time type")

    kind = result.dtype.kind
    if kind not in "iufMm":
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric or "
            f"datetime data"
        )

    return result


def check_event_array(array: ArrayLike, name: str) -> NDArray[np.bool_]:
    """
    Validate an event indicator and convert it to booleans.
    
    True / 1 marks an observed event, False / 0 a right-censored time.
    
    Args:
        array: Input to validate
        name: Parameter name for error messages
        
    Returns:
        numpy.ndarray of dtype bool
        
    Raises:
        ValidationError: If any value is not 0/1 or True/False
    """
    result = _as_array(array, name)

    if result.dtype == np.bool_:
        return result

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected 0/1 or bool"
        )

    unique_values = np.unique(result)
    if not np.all(np.isin(unique_values, [0, 1])):
        raise ValidationError(
            f"{name}: must contain only 0 and 1, "
            f"got unique values: {unique_values}"
        )

    return result.astype(np.bool_)


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify an array contains no NaN, Inf or NaT values.
    
    Integer arrays cannot hold missing values and pass unchecked.
    
    Args:
        array: Array to check
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If array contains non-finite values
    """
    if array.dtype.kind in "Mm":
        n_nat = int(np.sum(np.isnat(array)))
        if n_nat:
            raise ValidationError(f"{name}: contains {n_nat} NaT value(s)")
        return
    if not np.issubdtype(array.dtype, np.floating):
        return
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_non_negative(array: NDArray[Any], name: str) -> None:
    """
    Verify a numeric array has no negative entries.
    
    Datetime arrays have no sign and pass unchecked.
    
    Args:
        array: Array to check
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If any entry is negative
    """
    if array.dtype.kind == "M":
        return
    negative = array < np.zeros((), dtype=array.dtype)
    if np.any(negative):
        raise ValidationError(
            f"{name}: must be non-negative, found {int(np.sum(negative))} "
            f"negative value(s)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.
    
    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages
        
    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """
    Verify array is 1-dimensional.
    
    Args:
        array: Array to check
        name: Parameter name for error messages
        
    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_consistent_length(
    *arrays: NDArray[Any],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).
    
    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)
        
    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )
    
    if len(arrays) < 2:
        return
    
    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_probability(value: float, name: str) -> None:
    """
    Verify a scalar lies strictly inside (0, 1).
    
    Args:
        value: Probability to check
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If value is not a finite number in (0, 1)
    """
    if not np.isfinite(value) or value <= 0 or value >= 1:
        raise ValidationError(f"{name}: must be in (0, 1), got {value}")
