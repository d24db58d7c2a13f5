"""Parameter collection stage."""

from hostdeploy.config import ParameterCollector
from hostdeploy.stages.base import Stage


class CollectParameters(Stage):
    """Gather and validate deployment parameters (exit class 2 on rejection)."""

    name = "collect_parameters"
    title = "Collecting Parameters"

    def __init__(self, collector: ParameterCollector, connection_only: bool = False):
        self.collector = collector
        self.connection_only = connection_only

    def execute(self, ctx):
        if self.connection_only:
            ctx.config = self.collector.collect_connection(ctx.logger)
        else:
            ctx.config = self.collector.collect_deployment(ctx.logger)
        return f"Target: {ctx.config.connection.connection_string}"
