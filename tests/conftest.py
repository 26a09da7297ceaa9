"""Shared test fixtures."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

import pytest

from podlink.details import ui
from podlink.details.package import DependencyPackage
from podlink.xcode.formatter import format_pbxproj
from podlink.xcode.model import FileType, ProductType, generate_id
from podlink.xcode.project import XcodeProject

FIXTURES = Path(__file__).parent / "fixtures"

APP = ProductType.APPLICATION.value
STATIC_LIBRARY = ProductType.STATIC_LIBRARY.value
BUNDLE = ProductType.BUNDLE.value
UNIT_TESTS = ProductType.UNIT_TEST_BUNDLE.value


def project_data(targets: list[tuple[str, str, str]]) -> dict[str, Any]:
    """Build a minimal project dictionary with one native target per entry.

    Each entry is (target name, product file name, product type).
    """
    objects: dict[str, dict[str, Any]] = {}

    def add(key: str, props: dict[str, Any]) -> str:
        object_id = generate_id(f"fixture:{key}")
        objects[object_id] = props
        return object_id

    product_ids = []
    target_ids = []
    for name, product, product_type in targets:
        ref = add(
            f"product:{name}",
            {
                "isa": "PBXFileReference",
                "explicitFileType": FileType.from_path(product).value,
                "includeInIndex": "0",
                "path": product,
                "sourceTree": "BUILT_PRODUCTS_DIR",
            },
        )
        phase = add(
            f"frameworks:{name}",
            {
                "isa": "PBXFrameworksBuildPhase",
                "buildActionMask": "2147483647",
                "files": [],
                "runOnlyForDeploymentPostprocessing": "0",
            },
        )
        target = add(
            f"target:{name}",
            {
                "isa": "PBXNativeTarget",
                "buildPhases": [phase],
                "dependencies": [],
                "name": name,
                "productName": name,
                "productReference": ref,
                "productType": product_type,
            },
        )
        product_ids.append(ref)
        target_ids.append(target)

    products = add(
        "group:products",
        {"isa": "PBXGroup", "children": product_ids, "name": "Products", "sourceTree": "<group>"},
    )
    main = add("group:main", {"isa": "PBXGroup", "children": [products], "sourceTree": "<group>"})
    project = add(
        "project",
        {
            "isa": "PBXProject",
            "compatibilityVersion": "Xcode 3.2",
            "mainGroup": main,
            "productRefGroup": products,
            "targets": target_ids,
        },
    )
    return {
        "archiveVersion": "1",
        "classes": {},
        "objectVersion": "46",
        "objects": objects,
        "rootObject": project,
    }


def write_project(path: Path, targets: list[tuple[str, str, str]]) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "project.pbxproj").write_text(format_pbxproj(project_data(targets), path.stem))
    return path


def phase_paths(project: XcodeProject, target_name: str, phase_name: str = "Frameworks") -> list[str]:
    target = next(t for t in project.targets if t.name == target_name)
    phase = next(p for p in target.build_phases if p.name == phase_name)
    return [bf.file_ref.get("path") for bf in phase.files if bf.file_ref is not None]


@pytest.fixture(autouse=True)
def verbose_ui():
    ui.verbose = True
    yield
    ui.verbose = True


@pytest.fixture
def app_project(tmp_path: Path) -> Path:
    """Consumer project with an app target and a test target."""
    return write_project(
        tmp_path / "App.xcodeproj",
        [("App", "App.app", APP), ("AppTests", "AppTests.xctest", UNIT_TESTS)],
    )


@pytest.fixture
def xcode_fixture(tmp_path: Path) -> Path:
    """Copy of the hand-written Xcode project in tests/fixtures."""
    destination = tmp_path / "App.xcodeproj"
    shutil.copytree(FIXTURES / "App.xcodeproj", destination)
    return destination


@pytest.fixture
def foo_package(tmp_path: Path) -> DependencyPackage:
    """Dependency shipping a static library and a resource bundle."""
    root = tmp_path / "Pods" / "Foo"
    write_project(
        root / "Foo.xcodeproj",
        [("Foo", "libFoo.a", STATIC_LIBRARY), ("FooResources", "FooResources.bundle", BUNDLE)],
    )
    package = DependencyPackage("Foo", root, defined_in_file="Pods/Foo/Foo.podspec")
    package.add_specification(
        "Foo",
        xcodeproj={
            "project": "Foo.xcodeproj",
            "library_target": "Foo",
            "resource_target": "FooResources",
        },
    )
    return package


@pytest.fixture
def bar_package(tmp_path: Path) -> DependencyPackage:
    """Dependency shipping a static library only, next to a plain source spec."""
    root = tmp_path / "Pods" / "Bar"
    write_project(root / "Bar.xcodeproj", [("Bar", "libBar.a", STATIC_LIBRARY)])
    package = DependencyPackage("Bar", root, defined_in_file="Pods/Bar/Bar.podspec")
    package.add_specification(
        "Bar", xcodeproj={"project": "Bar.xcodeproj", "library_target": "Bar"}
    )
    package.add_specification("BarSources")
    return package
