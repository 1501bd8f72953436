import copy
import json
import os
from typing import Any, Dict, Optional

import yaml

from cloudsweep.core._private.cli_logger import cli_logger
from cloudsweep.core._private.constants import CLOUDSWEEP_DEFAULT_REGION, \
    CLOUDSWEEP_MAX_PARALLEL_NODES, CLOUDSWEEP_MAX_PARALLEL_REGIONS, \
    CLOUDSWEEP_WAIT_FOR_TERMINATION
from cloudsweep.core._private.providers import _get_node_provider_cls

CLOUDSWEEP_CONFIG_SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "config-schema.json")

DEFAULT_PROVIDER_TYPE = "aws"


def validate_config(config: Dict[str, Any]) -> None:
    """Required Dicts indicate that no extra fields can be introduced."""
    if not isinstance(config, dict):
        raise ValueError("Config {} is not a dictionary".format(config))

    with open(CLOUDSWEEP_CONFIG_SCHEMA_PATH) as f:
        schema = json.load(f)

    import jsonschema
    try:
        jsonschema.validate(config, schema)
    except jsonschema.ValidationError as e:
        # The validate method show very long message of the schema
        # and the instance data, we need show this only at verbose mode
        if cli_logger.verbosity > 0:
            raise e from None
        else:
            # For none verbose mode, show short message
            raise RuntimeError("JSON schema validation error: {}.".format(e.message)) from None

    provider_config = config["provider"]
    if provider_config["region"] not in provider_config["regions"]:
        raise ValueError(
            "The default region {} must be one of `regions`.".format(
                provider_config["region"]))

    provider_cls = _get_node_provider_cls(provider_config)
    provider_cls.validate_config(provider_config)


def prepare_config(config: Dict[str, Any],
                   override_region: Optional[str] = None) -> Dict[str, Any]:
    """
    The returned config has the following properties:
    - Has a provider type, a default region and the regions to search.
    - Has the teardown section with the defaults filled out.
    """
    config = copy.deepcopy(config)
    provider_config = config.setdefault("provider", {})
    provider_config.setdefault("type", DEFAULT_PROVIDER_TYPE)
    if override_region:
        provider_config["region"] = override_region
        provider_config["regions"] = [override_region]
    provider_config.setdefault("region", CLOUDSWEEP_DEFAULT_REGION)
    provider_config.setdefault("regions", [provider_config["region"]])
    provider_config.setdefault(
        "max_parallel_nodes", CLOUDSWEEP_MAX_PARALLEL_NODES)
    if provider_config["type"] == "aws":
        provider_config.setdefault(
            "wait_for_termination", CLOUDSWEEP_WAIT_FOR_TERMINATION)

    teardown_config = config.setdefault("teardown", {})
    teardown_config.setdefault(
        "max_parallel_regions", CLOUDSWEEP_MAX_PARALLEL_REGIONS)
    return config


def load_teardown_config(config_file: Optional[str] = None,
                         override_region: Optional[str] = None) -> Dict[str, Any]:
    if config_file:
        with open(config_file) as f:
            config = yaml.safe_load(f.read()) or {}
    else:
        config = {}

    config = prepare_config(config, override_region)
    validate_config(config)
    return config
