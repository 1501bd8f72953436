import pytest
import yaml

from cloudsweep.core._private.config import load_teardown_config, \
    prepare_config, validate_config
from cloudsweep.core._private.constants import CLOUDSWEEP_DEFAULT_REGION, \
    CLOUDSWEEP_MAX_PARALLEL_NODES
from cloudsweep.tests.unit.core.fake_provider import FAKE_PROVIDER_CONFIG


def _write_config(tmp_path, config):
    config_file = tmp_path / "teardown.yaml"
    config_file.write_text(yaml.safe_dump(config))
    return str(config_file)


class TestConfig:
    def test_defaults(self):
        config = load_teardown_config()
        provider_config = config["provider"]
        assert provider_config["type"] == "aws"
        assert provider_config["region"] == CLOUDSWEEP_DEFAULT_REGION
        assert provider_config["regions"] == [CLOUDSWEEP_DEFAULT_REGION]
        assert provider_config["max_parallel_nodes"] == \
            CLOUDSWEEP_MAX_PARALLEL_NODES
        assert "wait_for_termination" in provider_config
        assert config["teardown"]["max_parallel_regions"] == 1

    def test_load_config_file(self, tmp_path):
        config_file = _write_config(tmp_path, {
            "provider": dict(FAKE_PROVIDER_CONFIG, max_parallel_nodes=4),
            "teardown": {"max_parallel_regions": 2},
        })

        config = load_teardown_config(config_file)

        assert config["provider"]["regions"] == ["us-east", "eu-west"]
        assert config["provider"]["max_parallel_nodes"] == 4
        assert "wait_for_termination" not in config["provider"]
        assert config["teardown"]["max_parallel_regions"] == 2

    def test_override_region(self, tmp_path):
        config_file = _write_config(
            tmp_path, {"provider": FAKE_PROVIDER_CONFIG})

        config = load_teardown_config(config_file, override_region="ap-south")

        assert config["provider"]["region"] == "ap-south"
        assert config["provider"]["regions"] == ["ap-south"]

    def test_prepare_config_keeps_input(self):
        config = {"provider": dict(FAKE_PROVIDER_CONFIG)}
        prepared = prepare_config(config)
        assert "teardown" not in config
        assert prepared["teardown"]["max_parallel_regions"] == 1

    def test_schema_error(self):
        config = prepare_config({"provider": FAKE_PROVIDER_CONFIG})
        config["cluster_name"] = "unknown"
        with pytest.raises(RuntimeError):
            validate_config(config)

        config = prepare_config({
            "provider": FAKE_PROVIDER_CONFIG,
            "teardown": {"max_parallel_regions": 0}})
        with pytest.raises(RuntimeError):
            validate_config(config)

    def test_region_not_in_regions(self):
        config = prepare_config({
            "provider": dict(FAKE_PROVIDER_CONFIG, region="ap-south")})
        with pytest.raises(ValueError):
            validate_config(config)

    def test_unsupported_provider(self):
        config = prepare_config({
            "provider": {"type": "nowhere", "region": "us-east"}})
        with pytest.raises(NotImplementedError):
            validate_config(config)


if __name__ == "__main__":
    import sys

    sys.exit(pytest.main(["-v", __file__]))
