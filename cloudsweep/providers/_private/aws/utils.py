from functools import lru_cache
from typing import Any, Dict

import boto3
from boto3.exceptions import Boto3Error
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from cloudsweep.core._private.cli_logger import cli_logger, cf
from cloudsweep.core._private.constants import env_integer
from cloudsweep.core.errors import ProviderRejectedError, ResourceNotFoundError

# Max number of retries to AWS (default is 5, time increases exponentially)
BOTO_MAX_RETRIES = env_integer("BOTO_MAX_RETRIES", 12)

# Error codes of AWS meaning the resource is already gone
NOT_FOUND_ERROR_CODES = {
    "InvalidKeyPair.NotFound",
    "InvalidGroup.NotFound",
    "InvalidInstanceID.NotFound",
}


def get_boto_error_code(exc):
    error_code = None
    error_info = None
    if hasattr(exc, "response"):
        error_info = exc.response.get("Error", None)
    if error_info is not None:
        error_code = error_info.get("Code", None)

    return error_code


def boto_exception_handler(region, resource_kind, name):
    """Translate the boto errors of a call on a resource.

    NotFound errors become ResourceNotFoundError, any other boto error
    becomes ProviderRejectedError.
    """
    class ExceptionHandlerContextManager():
        def __enter__(self):
            pass

        def __exit__(self, type, value, tb):
            if value is None:
                return False
            if isinstance(value, ClientError):
                error_code = get_boto_error_code(value)
                if error_code in NOT_FOUND_ERROR_CODES:
                    raise ResourceNotFoundError(
                        region, resource_kind, name) from value
                raise ProviderRejectedError(
                    "Failed to call AWS for {} {} in region {}. "
                    "Error code: {}".format(
                        resource_kind, name, region, error_code),
                    error_code) from value
            if isinstance(value, (BotoCoreError, Boto3Error)):
                raise ProviderRejectedError(
                    "Failed to call AWS for {} {} in region {}. {}".format(
                        resource_kind, name, region, str(value))) from value
            return False

    return ExceptionHandlerContextManager()


def tags_list_to_dict(tags: list):
    tags_dict = {}
    for item in tags or []:
        tags_dict[item["Key"]] = item["Value"]
    return tags_dict


@lru_cache()
def resource_cache(name, region, max_retries=BOTO_MAX_RETRIES, **kwargs):
    cli_logger.verbose("Creating AWS resource `{}` in `{}`", cf.bold(name),
                       cf.bold(region))
    kwargs.setdefault(
        "config",
        Config(retries={"max_attempts": max_retries}),
    )
    return boto3.resource(
        name,
        region,
        **kwargs,
    )


def _make_resource(name, provider_config: Dict[str, Any], region=None):
    region = region or provider_config["region"]
    aws_credentials = provider_config.get("aws_credentials", {})
    return resource_cache(name, region, **aws_credentials)


def _make_resource_client(name, provider_config: Dict[str, Any], region=None):
    return _make_resource(name, provider_config, region).meta.client
