import logging
import json
from typing import Any, Dict

from cloudsweep.core._private.concurrent_cache import ConcurrentObjectCache
from cloudsweep.core._private.core_utils import load_class

logger = logging.getLogger(__name__)

# For caching provider instantiations across API calls of one python session
_node_provider_instances = ConcurrentObjectCache()
_resource_service_instances = ConcurrentObjectCache()


def _import_aws(provider_config):
    from cloudsweep.providers._private.aws.node_provider import AWSNodeProvider
    return AWSNodeProvider


def _import_aws_resource_service(provider_config):
    from cloudsweep.providers._private.aws.resource_service import \
        AWSResourceService
    return AWSResourceService


def _import_external(provider_config):
    provider_cls = load_class(path=provider_config["provider_class"])
    return provider_cls


def _import_external_resource_service(provider_config):
    service_cls = load_class(path=provider_config["resource_service_class"])
    return service_cls


_NODE_PROVIDERS = {
    "aws": _import_aws,
    "external": _import_external,  # Import an external module
}

_RESOURCE_SERVICES = {
    "aws": _import_aws_resource_service,
    "external": _import_external_resource_service,
}


def _get_node_provider_cls(provider_config: Dict[str, Any]):
    """Get the node provider class for a given provider config.

    Note that this may be used by private node providers that proxy methods to
    built-in node providers, so we should maintain backwards compatibility.

    Args:
        provider_config: provider section of the teardown config.

    Returns:
        NodeProvider class
    """
    importer = _NODE_PROVIDERS.get(provider_config["type"])
    if importer is None:
        raise NotImplementedError("Unsupported node provider: {}".format(
            provider_config["type"]))
    return importer(provider_config)


def _get_node_provider(provider_config: Dict[str, Any],
                       use_cache: bool = True) -> Any:
    """Get the instantiated node provider for a given provider config.

    Args:
        provider_config: provider section of the teardown config.
        use_cache: whether or not to use a cached definition if available. If
            False, the returned object will also not be stored in the cache.

    Returns:
        NodeProvider
    """
    def load_node_provider(provider_config: Dict[str, Any]):
        provider_cls = _get_node_provider_cls(provider_config)
        return provider_cls(provider_config)

    if not use_cache:
        return load_node_provider(provider_config)

    provider_key = (json.dumps(provider_config, sort_keys=True))
    return _node_provider_instances.get(
        provider_key, load_node_provider,
        provider_config=provider_config)


def _get_resource_service_cls(provider_config: Dict[str, Any]):
    importer = _RESOURCE_SERVICES.get(provider_config["type"])
    if importer is None:
        raise NotImplementedError("Unsupported resource service: {}".format(
            provider_config["type"]))
    return importer(provider_config)


def _get_resource_service(provider_config: Dict[str, Any],
                          use_cache: bool = True) -> Any:
    """Get the instantiated resource service for a given provider config."""
    def load_resource_service(provider_config: Dict[str, Any]):
        service_cls = _get_resource_service_cls(provider_config)
        return service_cls(provider_config)

    if not use_cache:
        return load_resource_service(provider_config)

    provider_key = (json.dumps(provider_config, sort_keys=True))
    return _resource_service_instances.get(
        provider_key, load_resource_service,
        provider_config=provider_config)
