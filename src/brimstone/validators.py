"""Validation decorators for pipeline setters and public entry points.

Each decorator checks one argument, located by keyword or by position
(``param_index`` counts ``self``, so 1 is the first real argument), and
raises with a message naming the parameter and, where one is known, a hint
about what the value means.

Example:
    >>> class Pipeline:
    ...     @validate_range(0.0, 1.0, "alpha")
    ...     def alpha(self, alpha: float):
    ...         ...
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from numbers import Real
from typing import Any

_RANGE_SUGGESTIONS = {
    "alpha": "0=project straight to the anchor gray, 0.05=default, larger=keep more lightness",
    "smooth": "0=no smoothing, values are a Gaussian sigma in pixels",
    "sigma": "0=no blur, values are a Gaussian sigma in pixels",
    "levels": "3=default, larger=finer 3D curve (levels + 1 bits)",
    "workers": "1=single-threaded, os.cpu_count() is a good upper bound",
    "bits": "bits per axis: the curve covers 2**bits cells along each axis",
}

_POSITIVE_SUGGESTIONS = {
    "size": "image width and height must both be at least 1 pixel",
    "width": "image width must be at least 1 pixel",
    "height": "image height must be at least 1 pixel",
    "bits": "a curve needs at least 1 bit per axis",
    "dims": "a curve needs at least 1 dimension",
}


def _get_argument(args: tuple, kwargs: dict, name: str, param_index: int) -> tuple[bool, Any]:
    if name in kwargs:
        return True, kwargs[name]
    if len(args) > param_index:
        return True, args[param_index]
    return False, None


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_range(
    min_value: float, max_value: float, name: str, param_index: int = 1
) -> Callable:
    """Require ``min_value <= value <= max_value``.

    :param min_value: Inclusive lower bound
    :param max_value: Inclusive upper bound
    :param name: Parameter name (keyword lookup and error message)
    :param param_index: Positional index of the parameter
    :raises TypeError: If the value is not a number
    :raises ValueError: If the value is out of range
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _get_argument(args, kwargs, name, param_index)
            if found:
                if not _is_number(value):
                    raise TypeError(f"{name} must be a number, got {type(value).__name__}")
                if not min_value <= value <= max_value:
                    msg = f"{name}={value} is outside valid range [{min_value}, {max_value}]"
                    hint = _RANGE_SUGGESTIONS.get(name)
                    if hint:
                        msg += f" ({hint})"
                    raise ValueError(msg)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_positive(name: str, param_index: int = 1) -> Callable:
    """Require ``value > 0``.

    :raises TypeError: If the value is not a number
    :raises ValueError: If the value is zero or negative
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _get_argument(args, kwargs, name, param_index)
            if found:
                if not _is_number(value):
                    raise TypeError(f"{name} must be a number, got {type(value).__name__}")
                if value <= 0:
                    msg = f"{name}={value} must be positive"
                    hint = _POSITIVE_SUGGESTIONS.get(name)
                    if hint:
                        msg += f" ({hint})"
                    raise ValueError(msg)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_type(expected: type | tuple[type, ...], name: str, param_index: int = 1) -> Callable:
    """Require ``isinstance(value, expected)``.

    :raises TypeError: If the value has the wrong type
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _get_argument(args, kwargs, name, param_index)
            if found and not isinstance(value, expected):
                if isinstance(expected, tuple):
                    names = ", ".join(t.__name__ for t in expected)
                    raise TypeError(
                        f"{name} must be one of ({names}), got {type(value).__name__}"
                    )
                raise TypeError(f"{name} must be {expected.__name__}, got {type(value).__name__}")
            return func(*args, **kwargs)

        return wrapper

    return decorator


def validate_choices(choices: Iterable[str], name: str, param_index: int = 1) -> Callable:
    """Require the value to be one of ``choices``.

    :raises ValueError: If the value is not a valid choice
    """
    valid = frozenset(choices)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            found, value = _get_argument(args, kwargs, name, param_index)
            if found and value not in valid:
                options = ", ".join(sorted(valid))
                raise ValueError(f'{name}="{value}" is not valid. Valid options: {options}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
