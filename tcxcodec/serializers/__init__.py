"""TCX writers."""

from .tcx_writer import TcxWriter, serialize

__all__ = ['TcxWriter', 'serialize']
