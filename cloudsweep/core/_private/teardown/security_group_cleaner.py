import logging

from cloudsweep.core._private.cli_logger import cli_logger, cf
from cloudsweep.core._private.teardown.registry import SecurityGroupCache
from cloudsweep.core.errors import ResourceNotFoundError, TeardownFailure, \
    PartialTeardownError
from cloudsweep.core.resource_service import ResourceService, SecurityGroup
from cloudsweep.core.tags import RESOURCE_KIND_SECURITY_GROUP

logger = logging.getLogger(__name__)


class SecurityGroupCleaner:
    """Deletes the security group named after a tag in a region.

    A group missing on the provider is not an error, so the cleaning can be
    run again and again.
    """

    def __init__(self, resource_service: ResourceService,
                 security_group_cache: SecurityGroupCache):
        self.resource_service = resource_service
        self.security_group_cache = security_group_cache

    def clean_security_group(self, region: str, tag: str) -> None:
        try:
            security_groups = self.resource_service.list_security_groups(
                region, tag)
        except Exception as e:
            cli_logger.error(
                "Failed to get security group {} in region {}. {}",
                tag, region, str(e))
            raise PartialTeardownError(
                [TeardownFailure(region, RESOURCE_KIND_SECURITY_GROUP, tag, e)]) from e

        if not security_groups:
            cli_logger.verbose(
                "No security group {} was found in region {}.", tag, region)
            self.security_group_cache.evict_all_matching_region_and_tag(
                region, tag)
            return

        failures = []
        for security_group in security_groups:
            try:
                self._delete_security_group(region, security_group)
            except Exception as e:
                cli_logger.error(
                    "Failed to delete security group {} in region {}. {}",
                    security_group.name, region, str(e))
                failures.append(TeardownFailure(
                    region, RESOURCE_KIND_SECURITY_GROUP,
                    security_group.group_id or security_group.name, e))

        if failures:
            raise PartialTeardownError(failures)

        self.security_group_cache.evict_all_matching_region_and_tag(
            region, tag)

    def _delete_security_group(self, region: str,
                               security_group: SecurityGroup) -> None:
        logger.debug(">> deleting securityGroup(%s) in %s",
                     security_group.name, region)
        cli_logger.print("Deleting security group: {}...",
                         cf.bold(security_group.group_id or security_group.name))
        try:
            self.resource_service.delete_security_group(
                region, security_group.name, security_group.group_id)
        except ResourceNotFoundError:
            cli_logger.verbose("Security group {} was already deleted.",
                               security_group.name)
        logger.debug("<< deleted securityGroup(%s) in %s",
                     security_group.name, region)
