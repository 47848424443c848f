from __future__ import annotations

import logging

from fiddler.core.autoload.classmap import find_classes, is_excluded, scan


def test_finds_namespaced_class_like_declarations() -> None:
    source = """<?php
namespace Acme\\Billing;

final class Invoice extends Document implements \\JsonSerializable {}
interface Payable {}
trait HasTotals {}
enum Status: string {}
abstract class Base {}
"""

    assert find_classes(source) == [
        "Acme\\Billing\\Invoice",
        "Acme\\Billing\\Payable",
        "Acme\\Billing\\HasTotals",
        "Acme\\Billing\\Status",
        "Acme\\Billing\\Base",
    ]


def test_global_namespace() -> None:
    assert find_classes("<?php class Legacy_Thing {}") == ["Legacy_Thing"]


def test_multiple_namespace_blocks() -> None:
    source = "<?php namespace A { class X {} } namespace B { class Y {} } namespace { class Z {} }"

    assert find_classes(source) == ["A\\X", "B\\Y", "Z"]


def test_ignores_comments_strings_and_class_constants() -> None:
    source = """<?php
// class InLineComment {}
# class InShellComment {}
/* class InBlockComment {} */
/**
 * class InDocBlock
 */
$a = 'class InSingleQuotes {}';
$b = "class InDoubleQuotes {}";
$c = Foo::class;
$d = new class {};
$e = new class extends Base {};
class Real {}
"""

    assert find_classes(source) == ["Real"]


def test_ignores_heredoc_bodies() -> None:
    source = "<?php\n$x = <<<EOT\nclass Fake {}\nEOT;\nclass Real {}\n"

    assert find_classes(source) == ["Real"]


def test_attributes_are_not_comments() -> None:
    source = "<?php\n#[Attribute]\nclass Marker {}\n"

    assert find_classes(source) == ["Marker"]


def test_scan_directory_maps_classes_to_files(tmp_path) -> None:
    src = tmp_path / "src"
    (src / "Sub").mkdir(parents=True)
    (src / "A.php").write_text("<?php namespace N; class A {}", encoding="utf-8")
    (src / "Sub" / "B.inc").write_text("<?php namespace N\\Sub; class B {}", encoding="utf-8")
    (src / "notes.txt").write_text("class NotPhp {}", encoding="utf-8")

    found = scan(src)

    assert found == {"N\\A": src / "A.php", "N\\Sub\\B": src / "Sub" / "B.inc"}


def test_scan_single_file(tmp_path) -> None:
    php = tmp_path / "functions.php"
    php.write_text("<?php class Helper {}", encoding="utf-8")

    assert scan(php) == {"Helper": php}


def test_scan_honours_exclusions(tmp_path) -> None:
    src = tmp_path / "src"
    (src / "Tests").mkdir(parents=True)
    (src / "A.php").write_text("<?php class A {}", encoding="utf-8")
    (src / "Tests" / "ATest.php").write_text("<?php class ATest {}", encoding="utf-8")

    found = scan(src, [(src / "Tests").as_posix() + "/"])

    assert list(found) == ["A"]


def test_missing_path_warns_and_yields_nothing(tmp_path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="fiddler.core.autoload.classmap"):
        assert scan(tmp_path / "nowhere") == {}

    assert "does not exist" in caplog.text


def test_is_excluded_patterns() -> None:
    assert is_excluded("/p/src/Tests/A.php", ["/p/src/Tests"])
    assert is_excluded("/p/src/Tests/A.php", ["/p/src/**/A.php"])
    assert not is_excluded("/p/src/TestsExtra/A.php", ["/p/src/Tests"])
    assert not is_excluded("/p/src/A.php", [])
