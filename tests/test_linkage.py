from pathlib import Path

import pytest

from podlink.config import RESOURCE_COPY_PHASE_NAME, Config
from podlink.details.package import DependencyPackage
from podlink.details.target_definition import DEFAULT_TARGET_NAME, TargetDefinition
from podlink.errors import ConfigurationError
from podlink.linker.planner import LinkagePlanner, compute_linkage_plan
from podlink.xcode.project import XcodeProject

from conftest import APP, STATIC_LIBRARY, phase_paths, write_project


class CountingOpener:
    def __init__(self):
        self.opened: list[Path] = []

    def __call__(self, path: Path) -> XcodeProject:
        self.opened.append(Path(path))
        return XcodeProject.open(path)


def test_plan_deduplicates_shared_specifications(
    app_project: Path, foo_package: DependencyPackage, tmp_path: Path
) -> None:
    [foo_spec] = foo_package.specifications
    umbrella = DependencyPackage("Umbrella", tmp_path / "Pods" / "Umbrella")
    umbrella.specifications.append(foo_spec)
    definition = TargetDefinition("App", app_project)

    plan = compute_linkage_plan({definition: [foo_package, umbrella]})

    assert plan == {definition: [foo_spec]}


def test_plan_omits_definitions_without_artifacts(app_project: Path, tmp_path: Path) -> None:
    sources_only = DependencyPackage("Sources", tmp_path / "Pods" / "Sources")
    sources_only.add_specification("Sources")
    definition = TargetDefinition("App", app_project)

    assert compute_linkage_plan({definition: [sources_only]}) == {}


def test_plan_skips_specifications_without_artifacts(
    app_project: Path, bar_package: DependencyPackage
) -> None:
    definition = TargetDefinition("App", app_project)

    plan = compute_linkage_plan({definition: [bar_package]})

    assert [spec.name for spec in plan[definition]] == ["Bar"]


def test_plan_is_memoized(app_project: Path, foo_package: DependencyPackage) -> None:
    planner = LinkagePlanner({TargetDefinition("App", app_project): [foo_package]})

    assert planner.linked_specs_by_target is planner.linked_specs_by_target
    assert planner.linked_specs == foo_package.specifications


def test_apply_links_library_and_resources(
    app_project: Path, foo_package: DependencyPackage
) -> None:
    definition = TargetDefinition("App", app_project)

    saved = LinkagePlanner({definition: [foo_package]}).apply_linkage()

    assert saved == [app_project]
    project = XcodeProject.open(app_project)
    assert phase_paths(project, "App") == ["libFoo.a"]
    assert phase_paths(project, "App", RESOURCE_COPY_PHASE_NAME) == ["FooResources.bundle"]
    assert phase_paths(project, "AppTests") == []


def test_apply_twice_changes_nothing(
    app_project: Path, foo_package: DependencyPackage
) -> None:
    packages_by_target = {TargetDefinition("App", app_project): [foo_package]}
    LinkagePlanner(packages_by_target).apply_linkage()
    first = (app_project / "project.pbxproj").read_text()

    LinkagePlanner(packages_by_target).apply_linkage()

    assert (app_project / "project.pbxproj").read_text() == first


def test_shared_project_is_opened_and_saved_once(
    app_project: Path,
    foo_package: DependencyPackage,
    bar_package: DependencyPackage,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    saves: list[Path] = []
    original_save = XcodeProject.save

    def counting_save(self: XcodeProject) -> None:
        saves.append(self.path)
        original_save(self)

    monkeypatch.setattr(XcodeProject, "save", counting_save)
    opener = CountingOpener()
    app = TargetDefinition("App", app_project)
    tests = TargetDefinition("AppTests", app_project)

    LinkagePlanner({app: [foo_package], tests: [bar_package]}, open_project=opener).apply_linkage()

    assert opener.opened.count(app_project) == 1
    assert saves == [app_project]
    project = XcodeProject.open(app_project)
    assert phase_paths(project, "App") == ["libFoo.a"]
    assert phase_paths(project, "AppTests") == ["libBar.a"]


def test_empty_definition_opens_nothing(app_project: Path, tmp_path: Path) -> None:
    sources_only = DependencyPackage("Sources", tmp_path / "Pods" / "Sources")
    sources_only.add_specification("Sources")
    opener = CountingOpener()

    saved = LinkagePlanner(
        {TargetDefinition("App", app_project): [sources_only]}, open_project=opener
    ).apply_linkage()

    assert saved == []
    assert opener.opened == []


def test_dependency_project_is_opened_once(
    app_project: Path, foo_package: DependencyPackage
) -> None:
    opener = CountingOpener()
    app = TargetDefinition("App", app_project)
    tests = TargetDefinition("AppTests", app_project)

    LinkagePlanner({app: [foo_package], tests: [foo_package]}, open_project=opener).apply_linkage()

    assert opener.opened.count(foo_package.root / "Foo.xcodeproj") == 1


def test_error_aborts_remaining_plan_but_keeps_earlier_saves(
    app_project: Path, foo_package: DependencyPackage, tmp_path: Path
) -> None:
    other_project = write_project(
        tmp_path / "Other" / "Other.xcodeproj", [("Other", "Other.app", APP)]
    )
    before = (other_project / "project.pbxproj").read_text()
    third_project = write_project(
        tmp_path / "Third" / "Third.xcodeproj", [("Third", "Third.app", APP)]
    )
    untouched = (third_project / "project.pbxproj").read_text()
    packages_by_target = {
        TargetDefinition("App", app_project): [foo_package],
        TargetDefinition("Missing", other_project): [foo_package],
        TargetDefinition("Third", third_project): [foo_package],
    }

    with pytest.raises(ConfigurationError):
        LinkagePlanner(packages_by_target).apply_linkage()

    assert phase_paths(XcodeProject.open(app_project), "App") == ["libFoo.a"]
    assert (other_project / "project.pbxproj").read_text() == before
    assert (third_project / "project.pbxproj").read_text() == untouched


def test_same_product_from_different_targets_is_merged_with_warning(
    app_project: Path, tmp_path: Path, capsys: pytest.CaptureFixture
) -> None:
    packages = []
    for name, target in (("One", "Core"), ("Two", "CoreLite")):
        root = tmp_path / "Pods" / name
        write_project(root / f"{name}.xcodeproj", [(target, "libCore.a", STATIC_LIBRARY)])
        package = DependencyPackage(name, root)
        package.add_specification(
            name, xcodeproj={"project": f"{name}.xcodeproj", "library_target": target}
        )
        packages.append(package)

    LinkagePlanner({TargetDefinition("App", app_project): packages}).apply_linkage()

    project = XcodeProject.open(app_project)
    assert phase_paths(project, "App") == ["libCore.a"]
    assert [c.display_name for c in project.group("Frameworks").children] == ["libCore.a"]
    assert "WARNING:" in capsys.readouterr().err


def test_default_target_strategy_comes_from_config(
    tmp_path: Path, foo_package: DependencyPackage
) -> None:
    path = write_project(
        tmp_path / "App.xcodeproj",
        [("Support", "libSupport.a", STATIC_LIBRARY), ("App", "App.app", APP)],
    )
    config = Config(default_target_strategy="first_application")

    LinkagePlanner(
        {TargetDefinition(DEFAULT_TARGET_NAME, path): [foo_package]}, config
    ).apply_linkage()

    project = XcodeProject.open(path)
    assert phase_paths(project, "App") == ["libFoo.a"]
    assert phase_paths(project, "Support") == []
