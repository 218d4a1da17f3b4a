"""Renderer implementations."""

from org_graph.renderers.graphviz import GraphvizRenderer

__all__ = ["GraphvizRenderer"]
