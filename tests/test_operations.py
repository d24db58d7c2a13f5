from hostdeploy.models.deployment import DeployMode, RemoteApplicationState
from hostdeploy.models.results import SSHResult
from hostdeploy.remote.operations import (
    CheckService,
    CleanupApplication,
    ConfigureProxy,
    DeployApplication,
    HttpProbe,
    InspectApplication,
    ProvisionHost,
    ShellProbe,
    application_logs,
)

APP = RemoteApplicationState()


def test_proxy_rule_routes_port_80_to_app_port():
    rule = ConfigureProxy(port=3000).rule()

    assert "listen 80;" in rule
    assert "proxy_pass http://127.0.0.1:3000;" in rule


def test_proxy_script_tests_syntax_before_reload():
    script = ConfigureProxy(port=3000).render(APP)

    assert "proxy_pass http://127.0.0.1:3000;" in script
    assert script.index("nginx -t") < script.index("systemctl reload nginx")
    assert "/etc/nginx/sites-available/deployed_app.conf" in script
    assert "/etc/nginx/sites-enabled/deployed_app.conf" in script
    assert "exit 3" in script
    failure_path = script[script.rindex("exit 0"):]
    assert "systemctl reload" not in failure_path
    assert "rule.prev" in failure_path


def test_dockerfile_deploy_script():
    script = DeployApplication(mode=DeployMode.DOCKERFILE, port=8080, manifest="Dockerfile").render(APP)

    assert script.startswith("set -euo pipefail")
    assert "build -t deployed_app:latest ." in script
    assert "-p 8080:8080" in script
    assert "COMPOSE_ARGS" not in script
    assert 'APP_DIR="$HOME/deployed_app"' in script


def test_compose_deploy_script():
    script = DeployApplication(mode=DeployMode.COMPOSE, port=8080, manifest="docker-compose.yaml").render(APP)

    assert '-p $COMPOSE_PROJECT -f docker-compose.yaml' in script
    assert "up -d --build" in script
    assert 'COMPOSE="$DOCKER compose"' in script
    assert "docker-compose" in script
    assert "-p 8080:8080" not in script


def test_inspect_and_log_capture():
    assert "--tail 20" in InspectApplication().render(APP)
    logs = application_logs().render(APP)
    assert "--tail 30" in logs
    assert "container status" not in logs


def test_probe_and_service_checks():
    probe = HttpProbe().render(APP)
    assert "http://127.0.0.1" in probe
    assert '[ "$code" = "200" ]' in probe

    assert "systemctl is-active --quiet nginx" in CheckService(service="nginx").render(APP)
    assert ShellProbe().render(APP).strip() == "echo SSH_OK"


def test_provision_installs_only_missing():
    script = ProvisionHost().render(APP)

    assert "command -v docker" in script
    assert "https://download.docker.com/linux/ubuntu/gpg" in script
    assert "systemctl enable" in script
    assert script.index("has_nginx") < script.index("apt_install nginx")


def test_cleanup_covers_every_created_resource():
    script = CleanupApplication().render(APP)

    assert "deployed_app_net" in script
    assert "/etc/nginx/sites-enabled/deployed_app.conf" in script
    assert "/etc/nginx/sites-available/deployed_app.conf" in script
    assert 'rm -rf "$APP_DIR"' in script
    assert script.rstrip().endswith("exit 0")


def test_markers_parse_status_lines():
    result = SSHResult(
        returncode=0,
        stdout="noise\nSTATUS rule=created\nSTATUS reload=done\nSTATUS broken\nSTATUS rule=updated\n",
    )

    assert result.markers() == {"rule": "updated", "reload": "done"}
