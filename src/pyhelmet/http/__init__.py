"""HTTP message values."""

from pyhelmet.http.message import Request, Response

__all__ = ["Request", "Response"]
