"""Tests for the Service and Ingress variants."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest
from kubernetes_asyncio.client import (
    V1LoadBalancerIngress,
    V1LoadBalancerStatus,
    V1ObjectMeta,
    V1Service,
    V1ServicePort,
    V1ServiceSpec,
    V1ServiceStatus,
)

from kubefzf.models.config import CtorConfig
from kubefzf.resources.ingress import Ingress
from kubefzf.resources.service import Service
from kubefzf.resources.unstructured import ResourceConstructionError

_CREATED = datetime(2026, 2, 19, 12, 0, 0, tzinfo=UTC)
_NOW = _CREATED + timedelta(days=2, hours=1)
_CONFIG = CtorConfig(cluster="prod")


def _metadata() -> dict[str, object]:
    return {
        "name": "web",
        "namespace": "shop",
        "labels": {"app": "web"},
        "creationTimestamp": "2026-02-19T12:00:00Z",
    }


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


def _typed_service(ports: list[V1ServicePort] | None = None) -> V1Service:
    return V1Service(
        metadata=V1ObjectMeta(
            name="web", namespace="shop", labels={"app": "web"}, creation_timestamp=_CREATED
        ),
        spec=V1ServiceSpec(
            type="LoadBalancer",
            cluster_ip="10.96.0.12",
            ports=ports
            if ports is not None
            else [
                V1ServicePort(port=443, protocol="TCP"),
                V1ServicePort(port=80, node_port=30080, protocol="TCP"),
            ],
            selector={"app": "web"},
        ),
        status=V1ServiceStatus(
            load_balancer=V1LoadBalancerStatus(ingress=[V1LoadBalancerIngress(ip="34.1.2.3")])
        ),
    )


def _dynamic_service(ports: list[dict[str, object]] | None = None) -> dict[str, object]:
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": _metadata(),
        "spec": {
            "type": "LoadBalancer",
            "clusterIP": "10.96.0.12",
            "ports": ports
            if ports is not None
            else [
                {"port": 80, "nodePort": 30080, "protocol": "TCP"},
                {"port": 443, "protocol": "TCP"},
            ],
            "selector": {"app": "web"},
        },
        "status": {"loadBalancer": {"ingress": [{"ip": "34.1.2.3"}]}},
    }


class TestService:
    def test_typed_fields(self) -> None:
        svc = Service.from_typed(_typed_service(), _CONFIG)
        assert svc.service_type == "LoadBalancer"
        assert svc.cluster_ip == "10.96.0.12"
        assert svc.external_ips == ("34.1.2.3",)
        assert svc.ports == ("443/TCP", "80:30080/TCP")

    def test_dynamic_matches_typed(self) -> None:
        assert Service.from_dynamic(_dynamic_service(), _CONFIG) == Service.from_typed(_typed_service(), _CONFIG)

    def test_port_reordering_is_not_a_change(self) -> None:
        first = Service.from_dynamic(_dynamic_service(), _CONFIG)
        reordered = _dynamic_service(
            ports=[{"port": 443, "protocol": "TCP"}, {"port": 80, "nodePort": 30080, "protocol": "TCP"}]
        )
        assert first.has_changed(Service.from_dynamic(reordered, _CONFIG)) is False

    def test_new_port_is_a_change(self) -> None:
        first = Service.from_dynamic(_dynamic_service(), _CONFIG)
        wider = _dynamic_service(
            ports=[
                {"port": 80, "nodePort": 30080, "protocol": "TCP"},
                {"port": 443, "protocol": "TCP"},
                {"port": 53, "protocol": "UDP"},
            ]
        )
        assert first.has_changed(Service.from_dynamic(wider, _CONFIG)) is True

    def test_protocol_defaults_to_tcp(self) -> None:
        svc = Service.from_dynamic(_dynamic_service(ports=[{"port": 8080}]), _CONFIG)
        assert svc.ports == ("8080/TCP",)

    def test_external_ips_merge_spec_and_hostname(self) -> None:
        obj = _dynamic_service()
        obj["spec"]["externalIPs"] = ["203.0.113.7"]  # type: ignore[index]
        obj["status"] = {"loadBalancer": {"ingress": [{"hostname": "lb.example.com"}, {"ip": "203.0.113.7"}]}}
        svc = Service.from_dynamic(obj, _CONFIG)
        assert svc.external_ips == ("203.0.113.7", "lb.example.com")

    def test_type_defaults_to_cluster_ip(self) -> None:
        obj = _dynamic_service()
        del obj["spec"]["type"]  # type: ignore[attr-defined]
        assert Service.from_dynamic(obj, _CONFIG).service_type == "ClusterIP"

    def test_non_integer_port_is_fatal(self) -> None:
        with pytest.raises(ResourceConstructionError) as exc_info:
            Service.from_dynamic(_dynamic_service(ports=[{"port": "http"}]), _CONFIG)
        assert exc_info.value.field_path == "port"

    def test_render(self) -> None:
        svc = Service.from_typed(_typed_service(), _CONFIG)
        assert svc.render(_NOW) == (
            "prod shop web LoadBalancer 10.96.0.12 34.1.2.3 443/TCP,80:30080/TCP app=web 2d app=web"
        )

    def test_headless_service_render(self) -> None:
        obj = _dynamic_service(ports=[])
        obj["spec"] = {"clusterIP": "None"}
        del obj["status"]
        svc = Service.from_dynamic(obj, _CONFIG)
        assert svc.render(_NOW) == "prod shop web ClusterIP None None None None 2d app=web"


# ---------------------------------------------------------------------------
# Ingress
# ---------------------------------------------------------------------------


def _dynamic_ingress(*hosts: str) -> dict[str, object]:
    return {
        "apiVersion": "networking.k8s.io/v1",
        "kind": "Ingress",
        "metadata": _metadata(),
        "spec": {
            "ingressClassName": "nginx",
            "rules": [{"host": h} for h in hosts] + [{"http": {"paths": []}}],
        },
        "status": {"loadBalancer": {"ingress": [{"ip": "34.1.2.3"}]}},
    }


class TestIngress:
    def test_dynamic(self) -> None:
        ing = Ingress.from_dynamic(_dynamic_ingress("b.example.com", "a.example.com", "a.example.com"), _CONFIG)
        assert ing.hosts == ("a.example.com", "b.example.com")
        assert ing.render(_NOW) == "prod shop web nginx a.example.com,b.example.com 34.1.2.3 2d app=web"

    def test_typed_matches_dynamic(self) -> None:
        typed = SimpleNamespace(
            metadata=V1ObjectMeta(
                name="web", namespace="shop", labels={"app": "web"}, creation_timestamp=_CREATED
            ),
            spec=SimpleNamespace(
                ingress_class_name="nginx",
                rules=[SimpleNamespace(host="a.example.com"), SimpleNamespace(host=None)],
            ),
            status=SimpleNamespace(
                load_balancer=SimpleNamespace(ingress=[SimpleNamespace(ip="34.1.2.3", hostname=None)])
            ),
        )
        assert Ingress.from_typed(typed, _CONFIG) == Ingress.from_dynamic(_dynamic_ingress("a.example.com"), _CONFIG)

    def test_host_order_is_not_a_change(self) -> None:
        first = Ingress.from_dynamic(_dynamic_ingress("a.example.com", "b.example.com"), _CONFIG)
        second = Ingress.from_dynamic(_dynamic_ingress("b.example.com", "a.example.com"), _CONFIG)
        assert first.has_changed(second) is False

    def test_rules_not_a_list_is_fatal(self) -> None:
        obj = _dynamic_ingress()
        obj["spec"]["rules"] = {"host": "a.example.com"}  # type: ignore[index]
        with pytest.raises(ResourceConstructionError) as exc_info:
            Ingress.from_dynamic(obj, _CONFIG)
        assert exc_info.value.field_path == "spec.rules"
