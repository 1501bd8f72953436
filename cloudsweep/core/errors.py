"""Errors raised by node providers, resource services and the teardown."""
from typing import Dict, List, Optional


class CloudSweepError(RuntimeError):
    pass


class ResourceNotFoundError(CloudSweepError):
    """The resource is already absent from the provider."""

    def __init__(self, region: str, resource_kind: str, name: str):
        super().__init__(
            "{} {} not found in region {}".format(resource_kind, name, region))
        self.region = region
        self.resource_kind = resource_kind
        self.name = name


class ProviderRejectedError(CloudSweepError):
    """The provider rejected the call: permission, rate limit, network and so on.

    The original provider exception is kept as `__cause__` when raised with
    `raise ... from`, and the provider error code (if any) as `error_code`.
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class NodeListingError(CloudSweepError):
    """Some regions could not be searched for the nodes of a tag.

    `nodes` holds the nodes found in the regions which did respond and
    `failed_regions` the error of every region which did not.
    """

    def __init__(self, tag: str, nodes: list,
                 failed_regions: Dict[str, BaseException]):
        super().__init__(
            "Failed to list nodes with tag {} in region(s): {}".format(
                tag, ", ".join(
                    "{} ({})".format(region, error)
                    for region, error in failed_regions.items())))
        self.tag = tag
        self.nodes = nodes
        self.failed_regions = failed_regions


class NodeDestroyError(CloudSweepError):
    def __init__(self, tag: str, failed_nodes: List[str],
                 failed_regions: Optional[List[str]] = None):
        failed_regions = failed_regions or []
        reasons = []
        if failed_nodes:
            reasons.append("{} node(s): {}".format(
                len(failed_nodes), ", ".join(failed_nodes)))
        if failed_regions:
            reasons.append("unreachable region(s): {}".format(
                ", ".join(failed_regions)))
        super().__init__(
            "Failed to destroy nodes with tag {}. {}".format(
                tag, "; ".join(reasons)))
        self.tag = tag
        self.failed_nodes = failed_nodes
        self.failed_regions = failed_regions


class TeardownFailure:
    """One failed teardown step for a region and a resource kind."""

    def __init__(self, region: Optional[str], resource_kind: str,
                 resource_name: Optional[str], error: BaseException):
        self.region = region
        self.resource_kind = resource_kind
        self.resource_name = resource_name
        self.error = error

    def __str__(self):
        target = self.resource_kind
        if self.resource_name:
            target = "{} {}".format(self.resource_kind, self.resource_name)
        if self.region:
            target = "{} in region {}".format(target, self.region)
        return "{}: {}".format(target, self.error)

    def __repr__(self):
        return "TeardownFailure({!r}, {!r}, {!r}, {!r})".format(
            self.region, self.resource_kind, self.resource_name, self.error)


class PartialTeardownError(CloudSweepError):
    """One or more teardown steps failed while the others went through.

    Successful steps are not rolled back, running the teardown again
    retries the failed ones.
    """

    def __init__(self, failures: List[TeardownFailure]):
        self.failures = list(failures)
        super().__init__(
            "Teardown failed for {} step(s):\n  {}".format(
                len(self.failures),
                "\n  ".join(str(failure) for failure in self.failures)))
