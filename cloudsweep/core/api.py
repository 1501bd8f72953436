"""IMPORTANT: this is an experimental interface and not currently stable."""

from typing import Any, Dict, List, Optional

from cloudsweep.core._private.config import load_teardown_config, \
    prepare_config, validate_config
from cloudsweep.core._private.teardown import teardown_operator
from cloudsweep.core.node_provider import Node


def load_config(config_file: Optional[str] = None,
                override_region: Optional[str] = None) -> Dict[str, Any]:
    """Load, fill out and validate a teardown config file.

    Args:
        config_file (str): Path to the YAML config file. The defaults are
            used when not given.
        override_region (str): If set, searches and cleans only this region.
    """
    return load_teardown_config(config_file, override_region)


def destroy_nodes_with_tag(config: Dict[str, Any], tag: str) -> None:
    """Destroys the nodes with the tag and their key pairs and security groups.

    Args:
        config (dict): The teardown config.
        tag (str): The tag of the nodes.

    Raises:
        PartialTeardownError: listing the failed steps, after every
            reachable step was attempted.
    """
    config = prepare_config(config)
    validate_config(config)
    operator = teardown_operator._get_teardown_operator(config)
    operator.destroy_nodes_with_tag(tag)


def list_nodes_with_tag(config: Dict[str, Any], tag: str) -> List[Node]:
    """Returns the nodes with the tag in any state, terminated included."""
    config = prepare_config(config)
    validate_config(config)
    return teardown_operator._list_nodes_with_tag(config, tag)
