from __future__ import annotations

import pytest

from fiddler.core.exceptions import ManifestError
from fiddler.core.manifest import ExternalPackageAdapter, load_external
from helpers.project import package


def test_missing_index_contributes_nothing(project) -> None:
    assert load_external(project.root) == {}


def test_composer1_list_shape(project) -> None:
    project.write_installed(
        [
            package(
                "psr/log",
                autoload={"psr-4": {"Psr\\Log\\": "Psr/Log/"}},
                require={"php": ">=5.3.0"},
            ),
            package("monolog/monolog", require={"psr/log": "^1.0", "ext-json": "*"}),
        ]
    )

    packages = load_external(project.root)

    assert list(packages) == ["vendor/psr/log", "vendor/monolog/monolog"]
    log = packages["vendor/psr/log"]
    assert log.path == "vendor/psr/log"
    assert log.autoload == {"psr-4": {"Psr\\Log\\": "Psr/Log/"}}
    assert log.deps == ("vendor/php",)
    assert packages["vendor/monolog/monolog"].deps == ("vendor/psr/log", "vendor/ext-json")


def test_composer2_packages_object_shape(project) -> None:
    project.write_installed({"packages": [package("psr/container")], "dev": True})

    assert list(load_external(project.root)) == ["vendor/psr/container"]


def test_replace_registers_aliases_to_same_manifest(project) -> None:
    project.write_installed(
        [package("symfony/symfony", replace={"symfony/console": "self.version", "symfony/yaml": "self.version"})]
    )

    packages = load_external(project.root)

    assert set(packages) == {"vendor/symfony/symfony", "vendor/symfony/console", "vendor/symfony/yaml"}
    canonical = packages["vendor/symfony/symfony"]
    assert packages["vendor/symfony/console"] is canonical
    assert packages["vendor/symfony/yaml"] is canonical
    assert canonical.identifier == "vendor/symfony/symfony"


def test_autoload_dev_merges_into_autoload(project) -> None:
    project.write_installed(
        [
            package(
                "acme/lib",
                autoload={"psr-4": {"Acme\\": "src/"}, "classmap": ["lib/"]},
                autoload_dev={"psr-4": {"Acme\\": "tests/", "Acme\\Fixtures\\": "fixtures/"}, "classmap": ["stubs/"]},
            )
        ]
    )

    manifest = load_external(project.root)["vendor/acme/lib"]

    assert manifest.autoload == {
        "psr-4": {"Acme\\": ["src/", "tests/"], "Acme\\Fixtures\\": "fixtures/"},
        "classmap": ["lib/", "stubs/"],
    }
    assert manifest.autoload_dev == {}


def test_to_manifest_without_optional_fields() -> None:
    manifest = ExternalPackageAdapter().to_manifest({"name": "acme/bare"})

    assert manifest.identifier == "vendor/acme/bare"
    assert manifest.autoload == {}
    assert manifest.deps == ()


def test_duplicate_entries_keep_the_later_one(project) -> None:
    project.write_installed([package("acme/lib", require={"a/a": "*"}), package("acme/lib")])

    assert load_external(project.root)["vendor/acme/lib"].deps == ()


def test_custom_index_path(project) -> None:
    project.write_file("deps/index.json", '[{"name": "acme/lib"}]')

    assert list(load_external(project.root, "deps/index.json")) == ["vendor/acme/lib"]


def test_invalid_json_index(project) -> None:
    project.write_installed(None, raw="{oops")

    with pytest.raises(ManifestError) as excinfo:
        load_external(project.root)

    assert excinfo.value.path == "vendor/composer/installed.json"


@pytest.mark.parametrize("raw", ['"text"', '{"dev": true}', "42"])
def test_index_must_hold_a_package_list(project, raw: str) -> None:
    project.write_installed(None, raw=raw)

    with pytest.raises(ManifestError):
        load_external(project.root)


@pytest.mark.parametrize("entry", [{"version": "1.0"}, {"name": ""}, {"name": 5}, "acme/lib"])
def test_entries_need_a_name(project, entry) -> None:
    project.write_installed([entry])

    with pytest.raises(ManifestError) as excinfo:
        load_external(project.root)

    assert excinfo.value.violations[0].startswith("[0]")


def test_require_must_be_a_mapping(project) -> None:
    project.write_installed([package("acme/lib", require=["psr/log"])])

    with pytest.raises(ManifestError) as excinfo:
        load_external(project.root)

    assert excinfo.value.violations == ["[acme/lib.require] must be an object of name to version constraint"]


def test_empty_maps_encoded_as_lists_are_accepted(project) -> None:
    project.write_installed([package("acme/lib", require=[], replace=[], autoload=[], autoload_dev=[])])

    packages = load_external(project.root)

    assert list(packages) == ["vendor/acme/lib"]
    assert packages["vendor/acme/lib"].deps == ()
    assert packages["vendor/acme/lib"].autoload == {}


@pytest.mark.parametrize("field", ["autoload", "autoload_dev"])
@pytest.mark.parametrize("value", ["src/", ["src/"], 3])
def test_autoload_rules_must_be_a_mapping(project, field: str, value) -> None:
    project.write_installed([package("acme/lib", **{field: value})])

    with pytest.raises(ManifestError) as excinfo:
        load_external(project.root)

    key = field.replace("_", "-")
    assert excinfo.value.violations == [f"[acme/lib.{key}] must be an object of autoload rules"]
