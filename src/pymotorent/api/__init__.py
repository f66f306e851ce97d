"""REST transport and endpoint bindings."""

from .base import BaseApi
from .rest import RestApi

__all__ = ["BaseApi", "RestApi"]
