from typing import Optional

from cloudsweep.core.node_provider import Node


class RegionResolver:
    """Gets the region of a node, or the default region without one."""

    def __init__(self, default_region: str):
        if not default_region:
            raise ValueError("A default region is required.")
        self.default_region = default_region

    def resolve(self, node: Optional[Node] = None) -> str:
        if node is not None and node.region:
            return node.region
        return self.default_region
