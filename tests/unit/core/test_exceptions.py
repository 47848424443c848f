from __future__ import annotations

from fiddler.core.exceptions import ConfigError, FiddlerError, ManifestError, ResolutionError


def test_manifest_error_message_lists_violations() -> None:
    err = ManifestError("invalid manifest at a/fiddler.json", path="a/fiddler.json", violations=["[deps] bad"])

    assert str(err) == "invalid manifest at a/fiddler.json\n[deps] bad"
    assert err.to_json_error() == {
        "error": "ManifestError",
        "message": str(err),
        "context": {"path": "a/fiddler.json", "violations": ["[deps] bad"]},
    }
    assert isinstance(err, ValueError)


def test_resolution_error_messages() -> None:
    assert str(ResolutionError("b", "a")) == "dependency 'b' required by 'a' does not exist"
    assert str(ResolutionError("x")) == "component 'x' does not exist"
    assert ResolutionError("b", "a").context == {"dependency": "b", "required_by": "a"}


def test_hierarchy() -> None:
    for cls in (ManifestError, ResolutionError, ConfigError):
        assert issubclass(cls, FiddlerError)


def test_context_is_copied() -> None:
    ctx = {"k": 1}
    err = FiddlerError("boom", context=ctx)
    ctx["k"] = 2

    assert err.context == {"k": 1}


def test_json_error_omits_empty_context() -> None:
    assert ConfigError("bad layer").to_json_error() == {"error": "ConfigError", "message": "bad layer"}
