import pytest

from cloudsweep.providers._private.aws.utils import resource_cache

from botocore.stub import Stubber

from cloudsweep.tests.aws.utils.constants import DEFAULT_REGION, \
    SECOND_REGION


@pytest.fixture()
def ec2_client_stub():
    resource = resource_cache("ec2", DEFAULT_REGION)
    with Stubber(resource.meta.client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()


@pytest.fixture()
def ec2_client_stub_second_region():
    resource = resource_cache("ec2", SECOND_REGION)
    with Stubber(resource.meta.client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()
