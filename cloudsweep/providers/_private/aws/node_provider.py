import logging
from typing import Any, Dict, List

from cloudsweep.core._private.constants import CLOUDSWEEP_WAIT_FOR_TERMINATION
from cloudsweep.core.errors import NodeListingError, \
    ProviderRejectedError, ResourceNotFoundError
from cloudsweep.core.node_provider import Node, NodeProvider
from cloudsweep.core.tags import CLOUDSWEEP_TAG_NODE_TAG, RESOURCE_KIND_NODE, \
    NODE_STATE_UNKNOWN
from cloudsweep.providers._private.aws.utils import _make_resource, \
    _make_resource_client, boto_exception_handler, tags_list_to_dict

logger = logging.getLogger(__name__)

# Polling of the instance_terminated waiter
TERMINATION_WAIT_DELAY = 5
TERMINATION_WAIT_MAX_ATTEMPTS = 120


class AWSNodeProvider(NodeProvider):
    """The EC2 instances carrying the node tag in the configured regions."""

    def __init__(self, provider_config: Dict[str, Any]) -> None:
        NodeProvider.__init__(self, provider_config)
        self.regions = provider_config.get(
            "regions", [provider_config["region"]])
        self.wait_for_termination = provider_config.get(
            "wait_for_termination", CLOUDSWEEP_WAIT_FOR_TERMINATION)

    def list_nodes_with_tag(self, tag: str) -> List[Node]:
        nodes = []
        failed_regions = {}
        for region in self.regions:
            try:
                nodes += self._list_nodes_in_region(region, tag)
            except ProviderRejectedError as e:
                logger.warning("Failed to list nodes with tag %s in %s: %s",
                               tag, region, e)
                failed_regions[region] = e
        if failed_regions:
            raise NodeListingError(tag, nodes, failed_regions)
        return nodes

    def _list_nodes_in_region(self, region: str, tag: str) -> List[Node]:
        ec2 = _make_resource("ec2", self.provider_config, region)
        filters = [
            {
                "Name": f"tag:{CLOUDSWEEP_TAG_NODE_TAG}",
                "Values": [tag],
            },
        ]
        nodes = []
        with boto_exception_handler(region, RESOURCE_KIND_NODE, tag):
            for instance in ec2.instances.filter(Filters=filters):
                tags = tags_list_to_dict(instance.tags)
                # Tag filters take wildcards, keep the exact tag only
                if tags.get(CLOUDSWEEP_TAG_NODE_TAG) != tag:
                    continue
                state = (instance.state or {}).get("Name", NODE_STATE_UNKNOWN)
                nodes.append(Node(
                    node_id=instance.id, region=region,
                    state=state, tags=tags))
        logger.debug("Found %d node(s) with tag %s in %s",
                     len(nodes), tag, region)
        return nodes

    def destroy_node(self, node: Node) -> None:
        ec2_client = _make_resource_client(
            "ec2", self.provider_config, node.region)
        logger.debug(">> terminating node(%s) in %s", node.node_id, node.region)
        try:
            with boto_exception_handler(
                    node.region, RESOURCE_KIND_NODE, node.node_id):
                ec2_client.terminate_instances(InstanceIds=[node.node_id])
                if self.wait_for_termination:
                    self._wait_instance_terminated(ec2_client, node)
        except ResourceNotFoundError:
            logger.debug("Node %s was already gone.", node.node_id)
            return
        logger.debug("<< terminated node(%s) in %s", node.node_id, node.region)

    def wait_node_terminated(self, node: Node) -> None:
        if not self.wait_for_termination:
            return
        ec2_client = _make_resource_client(
            "ec2", self.provider_config, node.region)
        logger.debug("Waiting for node(%s) in %s to terminate",
                     node.node_id, node.region)
        try:
            with boto_exception_handler(
                    node.region, RESOURCE_KIND_NODE, node.node_id):
                self._wait_instance_terminated(ec2_client, node)
        except ResourceNotFoundError:
            logger.debug("Node %s was already gone.", node.node_id)

    @staticmethod
    def _wait_instance_terminated(ec2_client, node: Node) -> None:
        waiter = ec2_client.get_waiter("instance_terminated")
        waiter.wait(
            InstanceIds=[node.node_id],
            WaiterConfig={
                "Delay": TERMINATION_WAIT_DELAY,
                "MaxAttempts": TERMINATION_WAIT_MAX_ATTEMPTS
            })

    @staticmethod
    def validate_config(provider_config: Dict[str, Any]) -> None:
        regions = provider_config.get("regions", [])
        if not regions:
            raise ValueError("At least one region is needed for AWS.")
