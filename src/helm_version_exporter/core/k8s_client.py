"""Kubernetes API wrapper for Argo CD Application discovery."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client import ApiException

from helm_version_exporter.config.settings import settings
from helm_version_exporter.exceptions import ClusterAccessError, DiscoveryError

logger = logging.getLogger(__name__)


class K8sClient:
    """Thin wrapper around the Kubernetes Python client."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._custom: client.CustomObjectsApi | None = None
        self._api_client: client.ApiClient | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            config.load_incluster_config()
            self._api_client = client.ApiClient()
            logger.debug("Loaded in-cluster Kubernetes config")
        except config.ConfigException:
            try:
                cfg = client.Configuration()
                config.load_kube_config(
                    context=self.context,
                    client_configuration=cfg,
                )
                self._api_client = client.ApiClient(configuration=cfg)
                logger.debug("Loaded kubeconfig from local environment")
            except (config.ConfigException, OSError) as err:
                raise ClusterAccessError(
                    f"Unable to load Kubernetes configuration: {err}"
                ) from err
        return self._api_client

    def connect(self) -> None:
        """Load client configuration eagerly so startup failures surface early."""
        self._load_config()

    @property
    def custom(self) -> client.CustomObjectsApi:
        if self._custom is None:
            self._custom = client.CustomObjectsApi(api_client=self._load_config())
        return self._custom

    def list_applications(self, namespace: str) -> list[dict[str, Any]]:
        """List Argo CD Application objects in a namespace as plain dicts."""
        try:
            result = self.custom.list_namespaced_custom_object(
                group=settings.application_group,
                version=settings.application_version,
                namespace=namespace,
                plural=settings.application_plural,
            )
        except ApiException as err:
            raise DiscoveryError(
                f"Error listing applications in namespace {namespace}: {err.status} {err.reason}"
            ) from err
        except OSError as err:
            raise DiscoveryError(
                f"Error listing applications in namespace {namespace}: {err}"
            ) from err
        items = result.get("items", []) if isinstance(result, dict) else []
        logger.debug("Found %d applications in namespace %s", len(items), namespace)
        return items
