"""Pipeline stages, in run order."""

from hostdeploy.stages.base import Stage
from hostdeploy.stages.cleanup import CleanupOperator
from hostdeploy.stages.connectivity import ConnectivityProber
from hostdeploy.stages.deploy import DeploymentExecutor
from hostdeploy.stages.parameters import CollectParameters
from hostdeploy.stages.provision import RemoteProvisioner
from hostdeploy.stages.proxy import ReverseProxyConfigurator
from hostdeploy.stages.source import LocalSourceStager, detect_deploy_mode
from hostdeploy.stages.validate import DeploymentValidator

__all__ = [
    "Stage",
    "CollectParameters",
    "LocalSourceStager",
    "ConnectivityProber",
    "RemoteProvisioner",
    "DeploymentExecutor",
    "ReverseProxyConfigurator",
    "DeploymentValidator",
    "CleanupOperator",
    "detect_deploy_mode",
]
