import logging
from typing import Any, Dict, List, Optional

from cloudsweep.core.resource_service import ResourceService, KeyPair, \
    SecurityGroup
from cloudsweep.core.tags import RESOURCE_KIND_KEY_PAIR, \
    RESOURCE_KIND_SECURITY_GROUP
from cloudsweep.providers._private.aws.utils import _make_resource_client, \
    boto_exception_handler

logger = logging.getLogger(__name__)


class AWSResourceService(ResourceService):
    """Key pairs and security groups of EC2."""

    def __init__(self, provider_config: Dict[str, Any]) -> None:
        ResourceService.__init__(self, provider_config)

    def _ec2_client(self, region):
        return _make_resource_client("ec2", self.provider_config, region)

    def list_key_pairs(self, region: str) -> List[KeyPair]:
        ec2_client = self._ec2_client(region)
        with boto_exception_handler(region, RESOURCE_KIND_KEY_PAIR, "*"):
            response = ec2_client.describe_key_pairs()
        return [
            KeyPair(
                name=key_pair["KeyName"],
                key_pair_id=key_pair.get("KeyPairId"),
                fingerprint=key_pair.get("KeyFingerprint"))
            for key_pair in response.get("KeyPairs", [])
        ]

    def delete_key_pair(self, region: str, name: str) -> None:
        ec2_client = self._ec2_client(region)
        with boto_exception_handler(region, RESOURCE_KIND_KEY_PAIR, name):
            ec2_client.delete_key_pair(KeyName=name)

    def list_security_groups(self, region: str, name: str) -> List[SecurityGroup]:
        ec2_client = self._ec2_client(region)
        filters = [
            {
                "Name": "group-name",
                "Values": [name],
            },
        ]
        with boto_exception_handler(
                region, RESOURCE_KIND_SECURITY_GROUP, name):
            response = ec2_client.describe_security_groups(Filters=filters)
        # The group-name filter also takes wildcards, keep exact names only
        return [
            SecurityGroup(
                name=security_group["GroupName"],
                group_id=security_group.get("GroupId"))
            for security_group in response.get("SecurityGroups", [])
            if security_group["GroupName"] == name
        ]

    def delete_security_group(self, region: str, name: str,
                              group_id: Optional[str] = None) -> None:
        ec2_client = self._ec2_client(region)
        with boto_exception_handler(
                region, RESOURCE_KIND_SECURITY_GROUP, group_id or name):
            if group_id:
                ec2_client.delete_security_group(GroupId=group_id)
            else:
                ec2_client.delete_security_group(GroupName=name)
