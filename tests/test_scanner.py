from __future__ import annotations

from contextgen.models import ScanResult, StructureFlags
from contextgen.scanner import scan_project, summarize_project
from tests._fixtures.projects import normalized, package_json
from tests._fixtures.repo_builder import RepoBuilder


def test_scan_detects_node_project(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": package_json("next", "react", dev=["typescript"]),
            "next.config.js": "module.exports = {}\n",
            "tsconfig.json": "{}\n",
            "src/pages/index.tsx": "export default function Home() { return null }\n",
            "src/components/Button.tsx": "export function Button() { return null }\n",
        }
    )
    project = repo_builder.normalize()

    scan = scan_project(project)

    assert scan.languages == ("JavaScript", "TypeScript (React)")
    assert scan.frameworks == ("Next.js",)
    assert scan.config_files == ("package.json", "tsconfig.json")
    assert scan.has_dependency("next")
    assert scan.dependency_version("typescript") == "^1.0.0"
    assert scan.structure.has_src
    assert scan.structure.has_components
    assert scan.structure.has_pages
    assert not scan.structure.has_services

    overview = summarize_project(scan, project)

    assert overview.stack == "JavaScript/TypeScript"
    assert overview.framework == "Next.js"
    assert overview.project_type == "Web Application"
    assert overview.entry_point == "Not identified"
    assert overview.key_dependencies == ("next", "react")
    assert overview.description == (
        "This appears to be a web application, built with Next.js, "
        "using JavaScript and TypeScript (React), with a component-based architecture."
    )


def test_scan_detects_python_service(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "requirements.txt": "fastapi>=0.110\nuvicorn  # server\n-r dev.txt\n",
            "main.py": "import fastapi\n",
            "app/services/users.py": "def list_users():\n    return []\n",
            "app/controllers/users.py": "def index():\n    return []\n",
        }
    )
    project = repo_builder.normalize()

    scan = scan_project(project)
    overview = summarize_project(scan, project)

    assert scan.languages == ("Python",)
    assert scan.entry_points == ("main.py",)
    assert dict(scan.dependencies) == {"fastapi": ">=0.110", "uvicorn": "*"}
    assert scan.structure.has_services and scan.structure.has_controllers
    assert overview.stack == "Python"
    assert overview.framework == "Python (pip)"
    assert overview.project_type == "Backend API"
    assert overview.entry_point == "main.py"


def test_root_manifest_wins_over_nested_ones() -> None:
    project = normalized(
        {
            "package.json": package_json("react"),
            "examples/demo/package.json": package_json("vue"),
        }
    )

    scan = scan_project(project)

    assert scan.has_dependency("react")
    assert not scan.has_dependency("vue")


def test_pyproject_dependencies_are_collected() -> None:
    project = normalized(
        {
            "pyproject.toml": (
                "[project]\n"
                'name = "svc"\n'
                'dependencies = ["Django>=5", "celery"]\n'
            ),
            "svc/__main__.py": "print('hi')\n",
        }
    )

    scan = scan_project(project)
    overview = summarize_project(scan, project)

    assert scan.has_dependency("django")
    assert scan.has_dependency("celery")
    assert scan.entry_points == ("svc/__main__.py",)
    assert overview.framework == "Django"


def test_scope_prefix_matches_any_package_in_scope() -> None:
    scan = ScanResult(
        languages=(),
        frameworks=(),
        entry_points=(),
        config_files=(),
        dependencies={"@clerk/nextjs": "^5.0.0"},
        structure=StructureFlags(),
    )

    assert scan.has_dependency("@clerk")
    assert scan.has_dependency("@clerk/nextjs")
    assert not scan.has_dependency("@clerk/next")
    assert not scan.has_dependency("clerk")
