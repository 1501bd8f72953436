import dataclasses
from typing import Any, Dict, List, Optional


@dataclasses.dataclass(frozen=True)
class KeyPair:
    """A named credential object living in a region."""
    name: str
    key_pair_id: Optional[str] = None
    fingerprint: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class SecurityGroup:
    """A named collection of ingress rules living in a region."""
    name: str
    group_id: Optional[str] = None


class ResourceService:
    """Interface for the region scoped auxiliary resources of the nodes.

    Implementations raise ResourceNotFoundError when the resource is already
    absent and ProviderRejectedError for any other failure of the provider.
    Retries, if any, happen inside the implementation.
    """

    def __init__(self, provider_config: Dict[str, Any]) -> None:
        self.provider_config = provider_config

    def list_key_pairs(self, region: str) -> List[KeyPair]:
        """Return all the key pairs of the region, unfiltered."""
        raise NotImplementedError

    def delete_key_pair(self, region: str, name: str) -> None:
        raise NotImplementedError

    def list_security_groups(self, region: str, name: str) -> List[SecurityGroup]:
        """Return the security groups of the region named exactly `name`."""
        raise NotImplementedError

    def delete_security_group(self, region: str, name: str,
                              group_id: Optional[str] = None) -> None:
        """Delete the security group, by id when the id is known."""
        raise NotImplementedError
