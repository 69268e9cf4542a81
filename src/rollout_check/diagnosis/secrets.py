"""Image pull secret presence check used to explain ImagePullBackOff."""

from __future__ import annotations

import logging

from rollout_check.cluster.gateway import ClusterGateway
from rollout_check.cluster.models import SecretLookup

logger = logging.getLogger(__name__)


class SecretPresenceProbe:
    """Reports whether a secret exists; lookup failures are returned, not raised."""

    def __init__(self, gateway: ClusterGateway) -> None:
        self._gateway = gateway

    def probe(self, secret_name: str, namespace: str) -> SecretLookup:
        lookup = self._gateway.get_secret(namespace, secret_name)
        logger.debug("Secret %s/%s found=%s", namespace, secret_name, lookup.found)
        return lookup
