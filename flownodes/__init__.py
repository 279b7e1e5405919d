"""Headless dataflow node-graph framework: models, ports, connections, scenes and styles."""

__version__ = "0.1.0"

__all__ = [
    "calculator",
    "connection",
    "geometry",
    "interaction",
    "model",
    "node",
    "node_state",
    "ports",
    "properties",
    "registry",
    "scene",
    "signals",
    "styles",
    "view",
]