"""helm-version-exporter serve - Run the exporter loop and metrics endpoint."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from helm_version_exporter.cli.options import ContextOption, NamespaceOption, VerboseOption, WorkersOption
from helm_version_exporter.config.settings import settings
from helm_version_exporter.core.index_resolver import ChartIndexResolver
from helm_version_exporter.core.k8s_client import K8sClient
from helm_version_exporter.core.metrics import MetricsSink
from helm_version_exporter.core.reconciler import Reconciler
from helm_version_exporter.core.scheduler import CycleScheduler
from helm_version_exporter.exceptions import ClusterAccessError
from helm_version_exporter.utils.log_setup import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer()


@app.callback(invoke_without_command=True)
def serve(
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    verbose: bool = VerboseOption,
    workers: Optional[int] = WorkersOption,
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Metrics port (default: $METRICS_PORT or 9080)"),
    interval: Optional[float] = typer.Option(None, "--interval", help="Seconds between cycles (default: 60)"),
    expire_stale: Optional[bool] = typer.Option(
        None,
        "--expire-stale/--keep-stale",
        help="Drop series for charts no longer seen in a cycle",
    ),
) -> None:
    """Expose helm_chart_version_status and refresh it on a fixed interval."""
    verbose = verbose or settings.verbose
    configure_logging(verbose)

    ns = namespace or settings.namespace
    logger.info("Starting helm-version-exporter with verbose=%s", verbose)
    logger.info("Using namespace: %s", ns)

    k8s = K8sClient(context=context or settings.kube_context)
    try:
        k8s.connect()
    except ClusterAccessError as err:
        logger.error("%s", err)
        raise typer.Exit(code=1)

    sink = MetricsSink()
    sink.serve(port if port is not None else settings.metrics_port, settings.metrics_addr)

    reconciler = Reconciler(
        ChartIndexResolver(timeout=settings.request_timeout),
        sink=sink,
        max_workers=workers if workers is not None else settings.resolver_workers,
    )
    scheduler = CycleScheduler(
        discover=lambda: k8s.list_applications(ns),
        reconciler=reconciler,
        interval=interval if interval is not None else settings.cycle_interval,
        expire_stale_series=settings.expire_stale_series if expire_stale is None else expire_stale,
    )
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        scheduler.stop()
        logger.info("Stopped")
