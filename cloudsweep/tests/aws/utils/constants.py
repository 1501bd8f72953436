from cloudsweep.core.tags import CLOUDSWEEP_TAG_NODE_TAG

DEFAULT_REGION = "us-west-2"

SECOND_REGION = "eu-west-1"

DEFAULT_TAG = "build-42"

DEFAULT_PROVIDER_CONFIG = {
    "type": "aws",
    "region": DEFAULT_REGION,
    "regions": [DEFAULT_REGION],
    "wait_for_termination": False,
    "max_parallel_nodes": 1,
}

DEFAULT_NODE_FILTERS = [
    {
        "Name": "tag:" + CLOUDSWEEP_TAG_NODE_TAG,
        "Values": [DEFAULT_TAG],
    },
]

DEFAULT_KEY_PAIRS = [
    {
        "KeyName": "build-42-1",
        "KeyPairId": "key-0001",
        "KeyFingerprint": "1f:51:ae:28:bf:89:e9:d8:1f:25:5d:37:2d:7d:b8:ca",
    },
    {
        "KeyName": "build-42-2",
        "KeyPairId": "key-0002",
    },
    {
        "KeyName": "build-420",
        "KeyPairId": "key-0003",
    },
    {
        "KeyName": "other-1",
        "KeyPairId": "key-0004",
    },
]

DEFAULT_SG = {
    "GroupName": DEFAULT_TAG,
    "GroupId": "sg-1234abcd",
    "Description": "Security group of " + DEFAULT_TAG,
    "VpcId": "vpc-0000",
}


def instance(instance_id, state, tag=DEFAULT_TAG):
    return {
        "InstanceId": instance_id,
        "State": {
            "Code": 16 if state == "running" else 32,
            "Name": state,
        },
        "Tags": [
            {
                "Key": CLOUDSWEEP_TAG_NODE_TAG,
                "Value": tag,
            },
        ],
    }
