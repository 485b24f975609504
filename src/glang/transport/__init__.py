"""Authenticated HTTP transports."""

from glang.transport.base import BaseTransport
from glang.transport.http import RequestsTransport

__all__ = ["BaseTransport", "RequestsTransport"]
