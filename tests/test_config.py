import pytest

from hostdeploy.config import ParameterCollector, load_config_file
from hostdeploy.constants import TOKEN_ENV_VAR
from hostdeploy.exceptions import InputValidationError
from hostdeploy.models.results import ExitClass

from conftest import REPO_URL, SERVER, TOKEN


def scripted_prompt(answers):
    """Prompt double answering from a list and recording what was asked."""
    asked = []
    remaining = list(answers)

    def prompt(text, default=None, password=False):
        asked.append((text, default, password))
        return remaining.pop(0)

    prompt.asked = asked
    return prompt


def test_collects_with_defaults(collector, logger, ssh_key):
    config = collector.collect_deployment(logger)

    assert config.repository_url == REPO_URL
    assert config.server_address == SERVER
    assert config.ssh_key_path == str(ssh_key)
    assert config.access_token == TOKEN
    assert config.branch == "main"
    assert config.ssh_user == "ubuntu"
    assert config.application_port == 8080
    assert config.repository_name == "shop"


def test_token_never_in_repr_and_registered_for_redaction(collector, logger):
    config = collector.collect_deployment(logger)

    assert TOKEN not in repr(config)
    assert logger.redact(f"x {TOKEN} y") == "x **** y"


def test_missing_value_without_input_is_rejected(logger, ssh_key):
    collector = ParameterCollector(
        overrides={"server_address": SERVER, "ssh_key_path": str(ssh_key)},
        interactive=False,
        environ={TOKEN_ENV_VAR: TOKEN},
    )

    with pytest.raises(InputValidationError) as excinfo:
        collector.collect_deployment(logger)
    assert excinfo.value.exit_code == ExitClass.INPUT_VALIDATION
    assert "repository_url" in excinfo.value.message


def test_invalid_value_is_reprompted(logger, overrides):
    del overrides["repository_url"]
    # repo twice, then branch, user and port
    prompt = scripted_prompt(["ftp://example.com/repo", REPO_URL, "main", "ubuntu", "8080"])
    collector = ParameterCollector(
        overrides=overrides, environ={TOKEN_ENV_VAR: TOKEN}, prompt=prompt
    )

    config = collector.collect_deployment(logger)

    assert config.repository_url == REPO_URL
    assert [text for text, _, _ in prompt.asked].count(prompt.asked[0][0]) == 2
    logger.close()
    assert "Invalid repo URL" in logger.log_path.read_text()


def test_attempt_budget_exhausted(logger, overrides):
    overrides["application_port"] = "http"
    prompt = scripted_prompt(["main", "ubuntu", "0", "99999"])
    collector = ParameterCollector(
        overrides=overrides, environ={TOKEN_ENV_VAR: TOKEN}, prompt=prompt
    )

    with pytest.raises(InputValidationError) as excinfo:
        collector.collect_deployment(logger)
    assert "Invalid port" in excinfo.value.message
    assert "3 attempt(s)" in excinfo.value.context


def test_token_is_prompted_hidden(logger, overrides):
    prompt = scripted_prompt([TOKEN, "main", "ubuntu", "8080"])
    collector = ParameterCollector(overrides=overrides, environ={}, prompt=prompt)

    config = collector.collect_deployment(logger)

    assert config.access_token == TOKEN
    token_prompt = prompt.asked[0]
    assert token_prompt[2] is True
    assert all(password is False for _, _, password in prompt.asked[1:])


def test_yaml_file_values_and_precedence(tmp_path, logger, ssh_key):
    config_file = tmp_path / "deploy.yml"
    config_file.write_text(
        f"repository_url: {REPO_URL}\n"
        "branch: develop\n"
        f"server_address: {SERVER}\n"
        f"ssh_key_path: {ssh_key}\n"
        "application_port: 3000\n"
    )
    collector = ParameterCollector(
        overrides={"branch": "release", "ssh_user": None},
        config_file=config_file,
        interactive=False,
        environ={TOKEN_ENV_VAR: TOKEN},
    )

    config = collector.collect_deployment(logger)

    assert config.branch == "release"
    assert config.application_port == 3000
    assert config.ssh_user == "ubuntu"


def test_token_in_yaml_is_ignored(tmp_path, logger):
    config_file = tmp_path / "deploy.yml"
    config_file.write_text("access_token: abc\nserver_address: 1.2.3.4\nextra: 1\n")

    values = load_config_file(config_file, logger)

    assert values == {"server_address": "1.2.3.4"}
    logger.close()
    text = logger.log_path.read_text()
    assert "Ignoring 'access_token'" in text
    assert "Unknown key 'extra'" in text


@pytest.mark.parametrize("content", ["repository_url: [unclosed\n", "- a\n- b\n"])
def test_bad_yaml_is_input_error(tmp_path, content):
    config_file = tmp_path / "deploy.yml"
    config_file.write_text(content)

    with pytest.raises(InputValidationError):
        load_config_file(config_file)


def test_missing_config_file(tmp_path):
    with pytest.raises(InputValidationError):
        load_config_file(tmp_path / "nope.yml")


def test_connection_only_skips_repository_and_token(logger, ssh_key):
    collector = ParameterCollector(
        overrides={"server_address": SERVER, "ssh_key_path": str(ssh_key)},
        interactive=False,
        environ={},
    )

    config = collector.collect_connection(logger)

    assert config.server_address == SERVER
    assert config.connection.connection_string == f"ubuntu@{SERVER}"


def test_key_path_is_expanded(logger, overrides, tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    overrides["ssh_key_path"] = "~/id_ed25519"
    collector = ParameterCollector(
        overrides=overrides, interactive=False, environ={TOKEN_ENV_VAR: TOKEN}
    )

    config = collector.collect_deployment(logger)

    assert config.ssh_key_path == str(tmp_path / "id_ed25519")
