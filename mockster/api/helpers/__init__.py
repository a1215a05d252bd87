"""Helpers for the mockster API routers."""

from .params import parse_duration, parse_time, read_params, require_param

__all__ = ["parse_duration", "parse_time", "read_params", "require_param"]
