import os
import sys


def env_integer(key, default):
    if key in os.environ:
        val = os.environ[key]
        if val == "inf":
            return sys.maxsize
        else:
            return int(val)
    return default


def env_bool(key, default):
    if key in os.environ:
        return True if os.environ[key].lower() == "true" else False
    return default


# The region used when neither the config nor the command line names one
CLOUDSWEEP_DEFAULT_REGION = os.environ.get(
    "CLOUDSWEEP_DEFAULT_REGION", "us-east-1")

# Max number of nodes destroyed in parallel by the generic destroy
CLOUDSWEEP_MAX_PARALLEL_NODES = env_integer(
    "CLOUDSWEEP_MAX_PARALLEL_NODES", 16)

# Regions are cleaned one at a time unless configured otherwise
CLOUDSWEEP_MAX_PARALLEL_REGIONS = 1

# Whether the node provider waits for the nodes to reach terminated
CLOUDSWEEP_WAIT_FOR_TERMINATION = env_bool(
    "CLOUDSWEEP_WAIT_FOR_TERMINATION", True)

LOGGER_FORMAT = (
    "%(asctime)s\t%(levelname)s %(filename)s:%(lineno)s -- %(message)s")
LOGGER_FORMAT_HELP = f"The logging format. default='{LOGGER_FORMAT}'"
LOGGER_LEVEL_INFO = "info"
LOGGER_LEVEL_HELP = ("The logging level threshold, choices=['debug', 'info',"
                     " 'warning', 'error', 'critical'], default='info'")
