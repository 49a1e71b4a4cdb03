"""Resource kind and object source enumerations."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Closed set of Kubernetes kinds that have a resource variant."""

    POD = "Pod"
    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    DAEMON_SET = "DaemonSet"
    REPLICA_SET = "ReplicaSet"
    SERVICE = "Service"
    INGRESS = "Ingress"
    CONFIG_MAP = "ConfigMap"
    JOB = "Job"
    CRON_JOB = "CronJob"
    PERSISTENT_VOLUME_CLAIM = "PersistentVolumeClaim"
    HORIZONTAL_POD_AUTOSCALER = "HorizontalPodAutoscaler"
    NODE = "Node"
    NAMESPACE = "Namespace"
    PERSISTENT_VOLUME = "PersistentVolume"


class ObjectSource(StrEnum):
    """Representation a raw object was delivered in."""

    TYPED = "typed"
    DYNAMIC = "dynamic"
