import pytest
import yaml
from click.testing import CliRunner

from cloudsweep.core.tags import NODE_STATE_TERMINATED
from cloudsweep.scripts.scripts import cli
from cloudsweep.tests.unit.core.fake_provider import reset_fake_cloud, \
    FAKE_PROVIDER_CONFIG

CLOUD_NAME = "cli"


@pytest.fixture
def cloud():
    cloud = reset_fake_cloud(CLOUD_NAME)
    cloud.add_node("i-1", "us-east", "build-42")
    cloud.add_node("i-2", "eu-west", "build-42")
    cloud.add_key_pair("us-east", "build-42-1")
    cloud.add_security_group("eu-west", "build-42")
    yield cloud
    reset_fake_cloud(CLOUD_NAME)


@pytest.fixture
def config_file(tmp_path):
    config_file = tmp_path / "teardown.yaml"
    config_file.write_text(yaml.safe_dump({
        "provider": dict(FAKE_PROVIDER_CONFIG, cloud_name=CLOUD_NAME),
    }))
    return str(config_file)


class TestScripts:
    def test_destroy(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["destroy", "build-42", "--config", config_file, "--yes"])

        assert result.exit_code == 0, result.output
        assert cloud.nodes["i-1"].state == NODE_STATE_TERMINATED
        assert cloud.nodes["i-2"].state == NODE_STATE_TERMINATED
        assert cloud.key_pairs["us-east"] == {}
        assert cloud.security_groups["eu-west"] == {}

    def test_destroy_alias(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["down", "build-42", "--config", config_file, "-y"])

        assert result.exit_code == 0, result.output
        assert cloud.key_pairs["us-east"] == {}

    def test_destroy_not_confirmed(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["destroy", "build-42", "--config", config_file], input="n\n")

        assert result.exit_code != 0
        assert cloud.calls_of("destroy_node") == []

    def test_destroy_failure(self, cloud, config_file):
        cloud.rejected_calls.add(("delete_key_pair", "us-east", "build-42-1"))
        runner = CliRunner()
        result = runner.invoke(
            cli, ["destroy", "build-42", "--config", config_file, "--yes"])

        assert result.exit_code != 0
        assert "build-42-1" in result.output
        # The other region is still cleaned
        assert cloud.security_groups["eu-west"] == {}

    def test_destroy_override_region(self, cloud, config_file):
        cloud.add_key_pair("us-east", "build-7-1")
        cloud.add_key_pair("eu-west", "build-7-1")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["destroy", "build-7", "--config", config_file,
                  "--region", "eu-west", "--yes"])

        assert result.exit_code == 0, result.output
        # Without nodes only the default region is cleaned
        assert [call[1] for call in cloud.calls_of("list_key_pairs")] == [
            "eu-west"]
        assert "build-7-1" in cloud.key_pairs["us-east"]
        assert "build-7-1" not in cloud.key_pairs["eu-west"]

    def test_nodes(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["nodes", "build-42", "--config", config_file])

        assert result.exit_code == 0, result.output
        assert "i-1" in result.output
        assert "eu-west" in result.output
        assert cloud.deletion_calls() == []

    def test_nodes_none_found(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["nodes", "build-7", "--config", config_file])

        assert result.exit_code == 0, result.output
        assert "No nodes" in result.output

    def test_nodes_pretty_log_style(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["nodes", "build-42", "--config", config_file,
                  "--log-style", "pretty", "--log-color", "false"])

        assert result.exit_code == 0, result.output
        assert "\n  i-1: us-east (running)" in result.output

    def test_nodes_record_log_style(self, cloud, config_file):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["nodes", "build-42", "--config", config_file,
                  "--log-style", "record", "--log-color", "true"])

        assert result.exit_code == 0, result.output
        assert "INFO\ti-1: us-east (running)" in result.output
        assert "\x1b[" not in result.output
        assert "\n  " not in result.output


if __name__ == "__main__":
    import sys

    sys.exit(pytest.main(["-v", __file__]))
