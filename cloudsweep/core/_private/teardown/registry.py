"""Process wide caches of the key pairs and security groups known locally.

The caches mirror the provider state to save provider calls when nodes are
launched again with the same tag. The provider stays the source of truth:
the teardown evicts every entry of a region and tag it cleans.
"""
from typing import NamedTuple, Optional

from cloudsweep.core._private.concurrent_cache import ConcurrentMapCache
from cloudsweep.core.resource_service import KeyPair


class RegionTag(NamedTuple):
    region: str
    tag: str


class PortsRegionTag(NamedTuple):
    region: str
    tag: str
    ports: Optional[str] = None


class KeyPairCache(ConcurrentMapCache):
    """Key pairs by RegionTag.

    The tag part of the key is either the node tag or the name of the
    key pair created for it.
    """

    def put_key_pair(self, region: str, tag: str, key_pair: KeyPair):
        self.put(RegionTag(region, tag), key_pair)

    def get_key_pair(self, region: str, tag: str) -> Optional[KeyPair]:
        return self.get(RegionTag(region, tag))

    def evict(self, region: str, tag: str) -> bool:
        return self.remove(RegionTag(region, tag)) is not None


class SecurityGroupCache(ConcurrentMapCache):
    """Security group names (or ids) by PortsRegionTag."""

    def put_security_group(self, region: str, tag: str, ports: Optional[str],
                           security_group: str):
        self.put(PortsRegionTag(region, tag, ports), security_group)

    def get_security_group(self, region: str, tag: str,
                           ports: Optional[str] = None) -> Optional[str]:
        return self.get(PortsRegionTag(region, tag, ports))

    def evict_all_matching_region_and_tag(self, region: str, tag: str) -> int:
        """Evict the entries of (region, tag) for every ports variant.

        Returns the number of entries evicted.
        """
        return self.remove_if(
            lambda key: key.region == region and key.tag == tag)
