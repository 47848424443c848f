from __future__ import annotations

import pytest

from fiddler.core.exceptions import ManifestError
from fiddler.core.manifest import ManifestLoader, find_and_load
from fiddler.core.manifest.loader import relative_identifier


def test_finds_nested_components_keyed_by_relative_path(project, manifest_schema) -> None:
    project.write_manifest("components/a", deps=["components/b"])
    project.write_manifest("components/b")
    project.write_manifest("apps/web/api", autoload={"psr-4": {"Api\\": "src/"}})

    manifests = find_and_load(project.root, manifest_schema)

    assert sorted(manifests) == ["apps/web/api", "components/a", "components/b"]
    api = manifests["apps/web/api"]
    assert api.path == "apps/web/api"
    assert api.autoload == {"psr-4": {"Api\\": "src/"}}
    assert api.autoload_dev == {}
    assert manifests["components/a"].deps == ("components/b",)


def test_missing_fields_default_to_empty(project, manifest_schema) -> None:
    project.write_manifest("lib", raw="{}")

    manifest = find_and_load(project.root, manifest_schema)["lib"]

    assert manifest.autoload == {}
    assert manifest.autoload_dev == {}
    assert manifest.deps == ()


def test_vendor_directories_are_skipped_at_any_depth(project, manifest_schema) -> None:
    project.write_manifest("app")
    project.write_manifest("vendor/acme/tool")
    project.write_manifest("app/vendor/nested")
    project.write_manifest(".git/hooks")
    project.write_manifest("_svn/pristine")
    project.write_manifest("lib/.svn/text-base")

    manifests = find_and_load(project.root, manifest_schema)

    assert list(manifests) == ["app"]


def test_root_manifest_uses_dot_identifier(project, manifest_schema) -> None:
    project.write_manifest(".", deps=["lib"])
    project.write_manifest("lib")

    manifests = find_and_load(project.root, manifest_schema)

    assert list(manifests) == [".", "lib"]
    assert manifests["."].path == "."


def test_discovery_order_is_sorted(project, manifest_schema) -> None:
    for name in ["zeta", "alpha", "mid/inner", "mid"]:
        project.write_manifest(name)

    loader = ManifestLoader(manifest_schema)
    found = [p.parent.relative_to(project.root).as_posix() for p in loader.iter_manifest_files(project.root)]

    assert found == ["alpha", "mid", "mid/inner", "zeta"]


def test_empty_tree_yields_nothing(project, manifest_schema) -> None:
    assert find_and_load(project.root, manifest_schema) == {}


def test_invalid_json_names_the_file(project, manifest_schema) -> None:
    project.write_manifest("broken", raw="{not json")

    with pytest.raises(ManifestError) as excinfo:
        find_and_load(project.root, manifest_schema)

    assert excinfo.value.path == "broken/fiddler.json"
    assert "broken/fiddler.json" in str(excinfo.value)


def test_schema_violations_are_aggregated(project, manifest_schema) -> None:
    project.write_manifest("bad", raw='{"deps": "components/a", "autoload": []}')

    with pytest.raises(ManifestError) as excinfo:
        find_and_load(project.root, manifest_schema)

    err = excinfo.value
    assert len(err.violations) >= 2
    assert any(v.startswith("[deps]") for v in err.violations)
    assert any(v.startswith("[autoload]") for v in err.violations)
    for violation in err.violations:
        assert violation in str(err)
    assert err.context["path"] == "bad/fiddler.json"


def test_non_string_dependency_is_rejected(project, manifest_schema) -> None:
    project.write_manifest("bad", raw='{"deps": ["ok", 3]}')

    with pytest.raises(ManifestError) as excinfo:
        find_and_load(project.root, manifest_schema)

    assert excinfo.value.violations[0].startswith("[deps.1]")


def test_manifest_must_be_an_object(project, manifest_schema) -> None:
    project.write_manifest("bad", raw="[]")

    with pytest.raises(ManifestError) as excinfo:
        find_and_load(project.root, manifest_schema)

    assert excinfo.value.violations[0].startswith("[] ")


def test_custom_manifest_name_and_exclusions(project, manifest_schema) -> None:
    project.write_file("pkg/component.json", "{}")
    project.write_file("build/pkg/component.json", "{}")
    project.write_manifest("ignored")

    loader = ManifestLoader(manifest_schema, manifest_name="component.json", excluded_dirs=["build"])

    assert list(loader.find_and_load(project.root)) == ["pkg"]


def test_relative_identifier(tmp_path) -> None:
    assert relative_identifier(tmp_path / "a" / "b", tmp_path) == "a/b"
    assert relative_identifier(tmp_path, tmp_path) == "."
