import logging
import re

from cloudsweep.core._private.cli_logger import cli_logger, cf
from cloudsweep.core._private.teardown.registry import KeyPairCache
from cloudsweep.core.errors import ResourceNotFoundError, TeardownFailure, \
    PartialTeardownError
from cloudsweep.core.resource_service import ResourceService
from cloudsweep.core.tags import RESOURCE_KIND_KEY_PAIR

logger = logging.getLogger(__name__)

KEY_PAIR_NAME_SUFFIX_PATTERN = "-[0-9]+"


def key_pair_name_pattern(tag: str):
    """The pattern of the key pairs created for a tag: <tag>-<digits>.

    The tag is matched literally.
    """
    return re.compile(re.escape(tag) + KEY_PAIR_NAME_SUFFIX_PATTERN)


class KeyPairCleaner:
    """Deletes the key pairs of a tag in a region and evicts them from the cache."""

    def __init__(self, resource_service: ResourceService,
                 key_pair_cache: KeyPairCache):
        self.resource_service = resource_service
        self.key_pair_cache = key_pair_cache

    def clean_key_pairs(self, region: str, tag: str) -> None:
        try:
            key_pairs = self.resource_service.list_key_pairs(region)
        except Exception as e:
            cli_logger.error(
                "Failed to list key pairs in region {}. {}", region, str(e))
            raise PartialTeardownError(
                [TeardownFailure(region, RESOURCE_KIND_KEY_PAIR, None, e)]) from e

        pattern = key_pair_name_pattern(tag)
        failures = []
        for key_pair in key_pairs:
            if not pattern.fullmatch(key_pair.name):
                continue
            try:
                self._delete_key_pair(region, key_pair.name)
            except Exception as e:
                cli_logger.error(
                    "Failed to delete key pair {} in region {}. {}",
                    key_pair.name, region, str(e))
                failures.append(TeardownFailure(
                    region, RESOURCE_KIND_KEY_PAIR, key_pair.name, e))

        if failures:
            raise PartialTeardownError(failures)

        # The key pair created for a tag may also be cached under the tag
        self.key_pair_cache.evict(region, tag)

    def _delete_key_pair(self, region: str, key_name: str) -> None:
        logger.debug(">> deleting keyPair(%s) in %s", key_name, region)
        cli_logger.print("Deleting key pair: {}...", cf.bold(key_name))
        try:
            self.resource_service.delete_key_pair(region, key_name)
        except ResourceNotFoundError:
            cli_logger.verbose("Key pair {} was already deleted.", key_name)
        self.key_pair_cache.evict(region, key_name)
        logger.debug("<< deleted keyPair(%s) in %s", key_name, region)
