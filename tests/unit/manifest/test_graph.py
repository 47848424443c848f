from __future__ import annotations

import logging

import pytest

from fiddler.core.manifest import Manifest, PackageGraph


def _m(identifier: str, *deps: str) -> Manifest:
    return Manifest(identifier=identifier, path=identifier, deps=deps)


def test_merges_local_and_external() -> None:
    graph = PackageGraph.from_sources(
        {"app": _m("app"), "lib": _m("lib")},
        {"vendor/psr/log": _m("vendor/psr/log")},
    )

    assert list(graph) == ["app", "lib", "vendor/psr/log"]
    assert len(graph) == 3
    assert graph["lib"].identifier == "lib"
    assert graph.local_identifiers() == ["app", "lib"]
    assert graph.external_identifiers() == ["vendor/psr/log"]


def test_build_targets_exclude_vendor_prefixed_identifiers() -> None:
    graph = PackageGraph.from_sources(
        {"app": _m("app"), "vendor/local-shim": _m("vendor/local-shim")},
        {"vendor/psr/log": _m("vendor/psr/log")},
    )

    assert graph.build_targets() == ["app"]
    assert graph.is_build_target("app")
    assert not graph.is_build_target("vendor/local-shim")


def test_graph_is_read_only() -> None:
    graph = PackageGraph({"app": _m("app")})

    with pytest.raises(TypeError):
        graph["other"] = _m("other")  # type: ignore[index]
    with pytest.raises(KeyError):
        graph["missing"]
    assert graph.get("missing") is None


def test_external_shadowing_local_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="fiddler.core.manifest.graph"):
        graph = PackageGraph.from_sources(
            {"vendor/acme/lib": _m("vendor/acme/lib", "local")},
            {"vendor/acme/lib": _m("vendor/acme/lib")},
        )

    assert graph["vendor/acme/lib"].deps == ()
    assert "shadows" in caplog.text


def test_custom_vendor_prefix() -> None:
    graph = PackageGraph({"app": _m("app"), "ext/tool": _m("ext/tool")}, vendor_prefix="ext/")

    assert graph.build_targets() == ["app"]
