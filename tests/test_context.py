from pathlib import Path

import pytest

from podlink.config import Config, DefaultTargetStrategy
from podlink.details.context import LinkContext
from podlink.details.target_definition import DEFAULT_TARGET_NAME, TargetDefinition


def test_package_root_defaults_to_name(tmp_path: Path) -> None:
    ctx = LinkContext(tmp_path)

    package = ctx.add_package("Foo")

    assert package.root == tmp_path / "Foo"
    assert package.defined_in_file == str(tmp_path / "LINK.podlink")


def test_duplicate_package_is_rejected(tmp_path: Path) -> None:
    ctx = LinkContext(tmp_path)
    ctx.add_package("Foo")

    with pytest.raises(ValueError):
        ctx.add_package("Foo", root="Vendor/Foo")


def test_duplicate_specification_is_rejected(tmp_path: Path) -> None:
    package = LinkContext(tmp_path).add_package("Foo")
    package.add_specification("Foo")

    with pytest.raises(ValueError):
        package.add_specification("Foo")


def test_duplicate_target_definition_is_rejected(tmp_path: Path) -> None:
    ctx = LinkContext(tmp_path)
    ctx.add_target_definition("App", "App.xcodeproj")

    with pytest.raises(ValueError):
        ctx.add_target_definition("App", "Other.xcodeproj")


def test_target_definition_packages_are_unique(tmp_path: Path) -> None:
    ctx = LinkContext(tmp_path)
    foo = ctx.add_package("Foo")

    definition = ctx.add_target_definition("App", "App.xcodeproj", packages=[foo, foo])
    definition.add_package(foo)

    assert definition.packages == [foo]
    assert definition.user_project.path == tmp_path / "App.xcodeproj"


@pytest.mark.parametrize(
    "link_with, expected",
    [
        (None, None),
        ([], None),
        ("App", ["App"]),
        (("App", "AppTests"), ["App", "AppTests"]),
    ],
)
def test_link_with_normalization(link_with, expected) -> None:
    assert TargetDefinition("App", "App.xcodeproj", link_with).link_with == expected


def test_default_definition() -> None:
    assert TargetDefinition(DEFAULT_TARGET_NAME, "App.xcodeproj").is_default
    assert not TargetDefinition("App", "App.xcodeproj").is_default


def test_configure_resolves_workspace_against_root(tmp_path: Path) -> None:
    ctx = LinkContext(tmp_path)

    config = ctx.configure(workspace="App.xcworkspace", build_dir="out")

    assert ctx.config is config
    assert config.workspace == tmp_path / "App.xcworkspace"
    assert config.build_dir == "out"


def test_config_defaults() -> None:
    config = Config()

    assert config.workspace is None
    assert config.default_target_strategy is DefaultTargetStrategy.FIRST_TARGET
    assert config.product_group == "Frameworks"
    assert config.resource_copy_phase == "Copy Pod Resource bundles"


def test_unknown_default_target_strategy_is_rejected() -> None:
    with pytest.raises(ValueError):
        Config(default_target_strategy="last_target")
