"""REST access to the downstream services."""

from .client import RestClient, RestFailure, RestResult, RestSuccess
from .query import add_params

__all__ = ["RestClient", "RestFailure", "RestResult", "RestSuccess", "add_params"]
