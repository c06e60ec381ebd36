"""Loader utilities for node definition files."""

from .node_loader import NodeLoader, NodeLoadResult

__all__ = ['NodeLoader', 'NodeLoadResult']
