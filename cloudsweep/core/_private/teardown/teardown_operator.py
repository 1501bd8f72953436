import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Set

from cloudsweep.core._private.cli_logger import cli_logger, cf
from cloudsweep.core._private.config import load_teardown_config
from cloudsweep.core._private.constants import CLOUDSWEEP_MAX_PARALLEL_REGIONS
from cloudsweep.core._private.providers import _get_node_provider, \
    _get_resource_service
from cloudsweep.core._private.teardown.key_pair_cleaner import KeyPairCleaner
from cloudsweep.core._private.teardown.region_resolver import RegionResolver
from cloudsweep.core._private.teardown.registry import KeyPairCache, \
    SecurityGroupCache
from cloudsweep.core._private.teardown.security_group_cleaner import \
    SecurityGroupCleaner
from cloudsweep.core.errors import NodeListingError, \
    PartialTeardownError, TeardownFailure
from cloudsweep.core.node_provider import Node, NodeProvider
from cloudsweep.core.resource_service import ResourceService
from cloudsweep.core.tags import RESOURCE_KIND_NODE, RESOURCE_KIND_KEY_PAIR, \
    RESOURCE_KIND_SECURITY_GROUP

logger = logging.getLogger(__name__)

# For keeping the known key pairs and security groups across calls of one
# python session
_key_pair_cache = KeyPairCache()
_security_group_cache = SecurityGroupCache()


class TagTeardownOperator:
    """Destroys the nodes of a tag and the key pairs and security groups
    created for the tag in every region the nodes occupied.

    Node auxiliary resources are created once per region and tag, so the
    cleaning runs once per distinct region rather than once per node.
    """

    def __init__(self,
                 node_provider: NodeProvider,
                 resource_service: ResourceService,
                 region_resolver: RegionResolver,
                 key_pair_cache: KeyPairCache,
                 security_group_cache: SecurityGroupCache,
                 max_parallel_regions: int = CLOUDSWEEP_MAX_PARALLEL_REGIONS):
        self.node_provider = node_provider
        self.region_resolver = region_resolver
        self.key_pair_cleaner = KeyPairCleaner(
            resource_service, key_pair_cache)
        self.security_group_cleaner = SecurityGroupCleaner(
            resource_service, security_group_cache)
        self.max_parallel_regions = max(1, max_parallel_regions)

    def destroy_nodes_with_tag(self, tag: str) -> None:
        """Destroy the nodes with the tag and clean up their resources.

        Raises PartialTeardownError listing every failed step once the node
        destroy and all the reachable region cleanups were attempted.
        """
        failures = []
        try:
            self.node_provider.destroy_nodes_with_tag(tag)
        except Exception as e:
            cli_logger.error("Failed to destroy nodes with tag {}. {}",
                             tag, str(e))
            failures.append(TeardownFailure(None, RESOURCE_KIND_NODE, None, e))

        # A node which failed to destroy still contributes its region
        try:
            regions = self.get_regions_with_tag(tag)
        except NodeListingError as e:
            cli_logger.error("Failed to list nodes with tag {} in region(s): {}",
                             tag, cli_logger.render_list(e.failed_regions))
            failures += [
                TeardownFailure(region, RESOURCE_KIND_NODE, None, error)
                for region, error in e.failed_regions.items()]
            regions = self._get_regions_of_nodes(
                tag, e.nodes) - set(e.failed_regions)
        except Exception as e:
            cli_logger.error("Failed to list nodes with tag {}. {}",
                             tag, str(e))
            failures.append(TeardownFailure(None, RESOURCE_KIND_NODE, None, e))
            raise PartialTeardownError(failures) from e

        failures += self._clean_regions(sorted(regions), tag)
        if failures:
            raise PartialTeardownError(failures)

    def get_regions_with_tag(self, tag: str) -> Set[str]:
        """The distinct regions of the nodes with the tag.

        Falls back to the default region when no node is left for the tag,
        so that resources of a tag without nodes can still be cleaned.
        """
        nodes = self.node_provider.list_nodes_with_tag(tag)
        return self._get_regions_of_nodes(tag, nodes)

    def _get_regions_of_nodes(self, tag: str, nodes: List[Node]) -> Set[str]:
        if not nodes:
            default_region = self.region_resolver.resolve(None)
            cli_logger.warning(
                "No nodes with tag {} were found. Cleaning up region {}.",
                tag, default_region)
            return {default_region}
        return {self.region_resolver.resolve(node) for node in nodes}

    def clean_region(self, region: str, tag: str) -> List[TeardownFailure]:
        with cli_logger.group("Cleaning up region {}", cf.bold(region)):
            return self._clean_region(region, tag)

    def _clean_region(self, region: str, tag: str) -> List[TeardownFailure]:
        failures = []
        for resource_kind, clean in (
                (RESOURCE_KIND_KEY_PAIR,
                 self.key_pair_cleaner.clean_key_pairs),
                (RESOURCE_KIND_SECURITY_GROUP,
                 self.security_group_cleaner.clean_security_group)):
            try:
                clean(region, tag)
            except PartialTeardownError as e:
                failures += e.failures
            except Exception as e:
                failures.append(
                    TeardownFailure(region, resource_kind, None, e))
        return failures

    def _clean_regions(self, regions: List[str],
                       tag: str) -> List[TeardownFailure]:
        logger.debug("Cleaning up tag %s in regions: %s", tag, regions)
        if self.max_parallel_regions <= 1 or len(regions) <= 1:
            failures = []
            for region in regions:
                failures += self.clean_region(region, tag)
            return failures

        # The output indentation is only changed on this thread
        failures = []
        with cli_logger.group("Cleaning up regions {}",
                              cf.bold(cli_logger.render_list(regions))):
            with ThreadPoolExecutor(
                    max_workers=self.max_parallel_regions) as executor:
                futures = [executor.submit(self._clean_region, region, tag)
                           for region in regions]
                for future in futures:
                    failures += future.result()
        return failures


def _get_teardown_operator(config: Dict[str, Any]) -> TagTeardownOperator:
    provider_config = config["provider"]
    return TagTeardownOperator(
        node_provider=_get_node_provider(provider_config),
        resource_service=_get_resource_service(provider_config),
        region_resolver=RegionResolver(provider_config["region"]),
        key_pair_cache=_key_pair_cache,
        security_group_cache=_security_group_cache,
        max_parallel_regions=config.get("teardown", {}).get(
            "max_parallel_regions", CLOUDSWEEP_MAX_PARALLEL_REGIONS))


def _list_nodes_with_tag(config: Dict[str, Any], tag: str) -> List[Node]:
    provider = _get_node_provider(config["provider"])
    return provider.list_nodes_with_tag(tag)


def teardown_nodes_with_tag(config_file: Optional[str], tag: str, yes: bool,
                            override_region: Optional[str] = None) -> None:
    """Destroys the nodes with the tag and their key pairs and security groups."""
    config = load_teardown_config(config_file, override_region)

    cli_logger.confirm(yes, "Are you sure that you want to destroy all nodes with tag {}?",
                       cf.bold(tag), _abort=True)
    cli_logger.newline()
    with cli_logger.group("Destroying nodes with tag: {}", tag):
        operator = _get_teardown_operator(config)
        try:
            operator.destroy_nodes_with_tag(tag)
        except PartialTeardownError as e:
            cli_logger.abort(
                "Teardown of tag {} failed for {} step(s):\n{}",
                tag, len(e.failures),
                cli_logger.render_list(e.failures, separator="\n"))

    cli_logger.success("Successfully destroyed nodes with tag: {}.", tag)


def show_nodes_with_tag(config_file: Optional[str], tag: str,
                        override_region: Optional[str] = None) -> None:
    """Shows the nodes with the tag and the regions they occupy."""
    config = load_teardown_config(config_file, override_region)
    try:
        nodes = _list_nodes_with_tag(config, tag)
    except NodeListingError as e:
        cli_logger.warning("Failed to list nodes with tag {} in region(s): {}",
                           tag, cli_logger.render_list(e.failed_regions))
        nodes = e.nodes
    if not nodes:
        cli_logger.print("No nodes with tag {} were found.", cf.bold(tag))
        return

    with cli_logger.group("Nodes with tag: {}", tag):
        for node in nodes:
            cli_logger.labeled_value(node.node_id, "{} ({})",
                                     node.region, node.state)
    regions = sorted({node.region for node in nodes if node.region})
    cli_logger.labeled_value("Regions", cli_logger.render_list(regions))
