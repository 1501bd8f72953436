import io
import logging
import os
import re

from itertools import chain

import setuptools

logger = logging.getLogger(__name__)

ROOT_DIR = os.path.dirname(__file__)

MINIMUM_SUPPORTED_PYTHON_VERSION = "3.8"


def find_version(*filepath):
    # Extract version information from filepath
    with open(os.path.join(ROOT_DIR, *filepath)) as fp:
        version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                                  fp.read(), re.M)
        if version_match:
            return version_match.group(1)
        raise RuntimeError("Unable to find version string.")


class SetupSpec:
    def __init__(self, name: str, description: str):
        self.name: str = name
        self.version = find_version("cloudsweep", "__init__.py")
        self.description: str = description
        self.files_to_include: list = []
        self.install_requires: list = []
        self.extras: dict = {}

    def get_packages(self):
        return setuptools.find_packages(include=["cloudsweep", "cloudsweep.*"])


# "cloudsweep" primary wheel package.
setup_spec = SetupSpec(
    "cloudsweep",
    "CloudSweep: tag scoped teardown of cloud nodes and their key pairs and security groups")

# NOTE: The lists below must be kept in sync with package_data
setup_spec.files_to_include = [
    "core/config-schema.json",
]

setup_spec.extras = {
    "aws": [
        "boto3",
        "botocore",
    ],
    "test": [
        "pytest",
    ],
}

setup_spec.extras["all"] = list(
        set(chain.from_iterable(setup_spec.extras.values())))

# These are the main dependencies for users of cloudsweep. This list
# should be carefully curated.
setup_spec.install_requires = [
    "boto3",
    "botocore",
    "click >= 7.0",
    "colorama",
    "colorful",
    "jsonschema",
    "pyyaml",
]

setuptools.setup(
    name=setup_spec.name,
    version=setup_spec.version,
    description=setup_spec.description,
    long_description=io.open(
        os.path.join(ROOT_DIR, "README.md"), "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    keywords="Cloud Teardown AWS EC2 KeyPair SecurityGroup",
    classifiers=[
        f"Programming Language :: Python :: {MINIMUM_SUPPORTED_PYTHON_VERSION}",
    ],
    python_requires=f">={MINIMUM_SUPPORTED_PYTHON_VERSION}",
    packages=setup_spec.get_packages(),
    install_requires=setup_spec.install_requires,
    extras_require=setup_spec.extras,
    package_data={"cloudsweep": setup_spec.files_to_include},
    entry_points={
        "console_scripts": [
            "cloudsweep=cloudsweep.scripts.scripts:main",
        ]
    },
    include_package_data=True,
    zip_safe=False,
    license="Apache 2.0")
