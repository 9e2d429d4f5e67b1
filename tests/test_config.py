"""Tests for building ReportConfig from Action inputs and overrides."""

import pytest

from prdeps.config import ReportConfig, input_env_name, load_config, parse_bool
from prdeps.errors import ConfigurationError


class TestLoadConfig:

    def test_defaults(self):
        config = load_config({})

        assert config == ReportConfig()
        assert config.run_depcheck is True
        assert config.api_url == "https://api.github.com"

    def test_action_inputs(self):
        env = {
            "INPUT_COMMENT-PR": "true",
            "INPUT_FAIL-ON-OUTDATED": "TRUE",
            "INPUT_FAIL-ON-VULNERABILITY": "false",
            "INPUT_ELIDE": "10",
            "INPUT_DEPCHECK": "false",
            "INPUT_COMMAND-TIMEOUT": "120",
        }
        config = load_config(env)

        assert config.comment_on_pr is True
        assert config.fail_on_outdated is True
        assert config.fail_on_vulnerability is False
        assert config.elide == 10
        assert config.run_depcheck is False
        assert config.command_timeout == 120.0

    def test_comment_on_pr_alias(self):
        assert load_config({"INPUT_COMMENT-ON-PR": "yes"}).comment_on_pr is True

    def test_primary_comment_input_wins_over_alias(self):
        config = load_config({"INPUT_COMMENT-PR": "false", "INPUT_COMMENT-ON-PR": "true"})

        assert config.comment_on_pr is False

    def test_alias_used_when_primary_empty(self):
        assert load_config({"INPUT_COMMENT-PR": "", "INPUT_COMMENT-ON-PR": "true"}).comment_on_pr is True

    def test_empty_inputs_keep_defaults(self):
        config = load_config({"INPUT_ELIDE": "", "INPUT_DEPCHECK": " ", "INPUT_COMMAND-TIMEOUT": ""})

        assert config.elide == 0
        assert config.run_depcheck is True
        assert config.command_timeout == 600.0

    def test_github_context(self):
        env = {
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_REPOSITORY": "octo/app",
            "GITHUB_TOKEN": "ghs_x",
            "GITHUB_SHA": "abc123",
            "GITHUB_EVENT_PATH": "/tmp/event.json",
            "GITHUB_API_URL": "https://ghe.example.com/api/v3/",
            "GITHUB_OUTPUT": "/tmp/out",
        }
        config = load_config(env)

        assert config.event_name == "pull_request"
        assert config.split_repository() == ("octo", "app")
        assert config.token == "ghs_x"
        assert config.sha == "abc123"
        assert config.api_url == "https://ghe.example.com/api/v3"
        assert config.output_path == "/tmp/out"

    def test_token_input_wins_over_env(self):
        config = load_config({"INPUT_GITHUB-TOKEN": "from-input", "GITHUB_TOKEN": "from-env"})

        assert config.token == "from-input"

    def test_overrides_win_over_inputs(self):
        config = load_config({"INPUT_ELIDE": "10", "INPUT_COMMENT-PR": "true"}, elide=3, comment_on_pr=False)

        assert config.elide == 3
        assert config.comment_on_pr is False

    def test_none_override_means_not_given(self):
        config = load_config({"INPUT_FAIL-ON-OUTDATED": "true"}, fail_on_outdated=None)

        assert config.fail_on_outdated is True

    @pytest.mark.parametrize(
        "env",
        [
            {"INPUT_COMMENT-PR": "maybe"},
            {"INPUT_ELIDE": "ten"},
            {"INPUT_ELIDE": "-1"},
            {"INPUT_COMMAND-TIMEOUT": "0"},
        ],
    )
    def test_invalid_inputs(self, env):
        with pytest.raises(ConfigurationError):
            load_config(env)


def test_parse_bool_passthrough():
    assert parse_bool("x", True) is True
    assert parse_bool("x", "Off") is False


def test_input_env_name_keeps_hyphens():
    assert input_env_name("fail-on-outdated") == "INPUT_FAIL-ON-OUTDATED"


@pytest.mark.parametrize("repository", [None, "", "octo", "/app", "octo/"])
def test_split_repository_rejects_malformed(repository):
    with pytest.raises(ConfigurationError):
        ReportConfig(repository=repository).split_repository()
