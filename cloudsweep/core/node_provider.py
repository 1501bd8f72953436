import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from cloudsweep.core._private.constants import CLOUDSWEEP_MAX_PARALLEL_NODES
from cloudsweep.core.errors import NodeDestroyError, NodeListingError
from cloudsweep.core.tags import NODE_STATES_NON_TERMINATED, \
    NODE_STATES_TERMINATING

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Node:
    """Metadata from querying a cloud instance."""
    node_id: str
    region: Optional[str]
    state: str
    tags: Dict[str, str] = dataclasses.field(default_factory=dict, compare=False)

    def is_terminated(self) -> bool:
        return self.state not in NODE_STATES_NON_TERMINATED

    def is_terminating(self) -> bool:
        return self.state in NODE_STATES_TERMINATING


class NodeProvider:
    """Interface for getting and destroying the nodes carrying a tag.

    Provisioning nodes belongs to other code paths, a provider here only
    needs to list the nodes of a tag and destroy one node. The generic
    `destroy_nodes_with_tag` builds on these two.

    A node provider is constructed with the provider section of the config
    and may be reused across tags.
    """

    def __init__(self, provider_config: Dict[str, Any]) -> None:
        self.provider_config = provider_config

    def list_nodes_with_tag(self, tag: str) -> List[Node]:
        """Return all the nodes with the tag, in any state.

        Recently terminated nodes are included for as long as the
        provider still reports them. Raises NodeListingError carrying the
        nodes of the reachable regions when some regions failed.
        """
        raise NotImplementedError

    def destroy_node(self, node: Node) -> None:
        """Terminates the specified node."""
        raise NotImplementedError

    def wait_node_terminated(self, node: Node) -> None:
        """Waits for a node already terminating to reach terminated."""
        pass

    def destroy_nodes_with_tag(self, tag: str) -> None:
        """Destroy every non terminated node with the tag.

        Nodes are destroyed on a bounded worker pool, nodes already shutting
        down are only waited for. Nodes of the regions which could be listed
        are destroyed even when other regions failed. Raises NodeDestroyError
        naming every failed node and unreachable region once all the nodes
        were attempted.
        """
        failed_regions = []
        try:
            nodes = self.list_nodes_with_tag(tag)
        except NodeListingError as e:
            logger.warning("Failed to list nodes with tag %s in: %s",
                           tag, list(e.failed_regions))
            nodes = e.nodes
            failed_regions = list(e.failed_regions)

        tasks = [(self.destroy_node, node) for node in nodes
                 if not node.is_terminated()]
        tasks += [(self.wait_node_terminated, node) for node in nodes
                  if node.is_terminating()]

        failed_nodes = []
        if not tasks:
            logger.debug("No running nodes with tag %s to destroy.", tag)
        else:
            failed_nodes = self._run_on_nodes(tag, tasks)

        if failed_nodes or failed_regions:
            raise NodeDestroyError(tag, failed_nodes, failed_regions)

    def _run_on_nodes(self, tag, tasks) -> List[str]:
        max_workers = self.provider_config.get(
            "max_parallel_nodes", CLOUDSWEEP_MAX_PARALLEL_NODES)
        logger.debug(">> destroying %d node(s) with tag %s", len(tasks), tag)
        failed_nodes = []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {}
            for run, node in tasks:
                futures[node.node_id] = executor.submit(run, node)

            for node_id, future in futures.items():
                try:
                    future.result()
                except Exception as e:
                    logger.warning("Failed to destroy node %s: %s", node_id, e)
                    failed_nodes.append(node_id)
        logger.debug("<< destroyed %d node(s) with tag %s",
                     len(tasks) - len(failed_nodes), tag)
        return failed_nodes

    @staticmethod
    def validate_config(provider_config: Dict[str, Any]) -> None:
        """Check the configuration validation.
        This happens before the config is used by the teardown.
        """
        pass
