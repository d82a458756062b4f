"""
Data Models Layer.

This package contains the Pydantic models for the client configuration, the
inputs of each operation, and the responses returned by the service.
"""

from .config import ClientConfig, ConfigRegistry
from .params import ParameterSet
from .requests import Period

__all__ = ["ClientConfig", "ConfigRegistry", "ParameterSet", "Period"]
