from __future__ import annotations

from contextgen.analyzers.evidence import build_evidence_graph
from contextgen.analyzers.signals import collect_signals
from tests._fixtures.projects import BLOG, SAAS, SHOP, package_json, scanned


def _evidence(files, repo_name="fixture"):
    record, scan = scanned(files)
    return build_evidence_graph(scan, record, collect_signals(scan, record, repo_name))


def test_blog_evidence() -> None:
    evidence = _evidence(BLOG)

    assert evidence.has_nextjs and evidence.has_react
    assert evidence.has_app_router
    assert evidence.has_blog_structure
    assert evidence.has_markdown_files
    assert evidence.has_content_folder
    assert evidence.has_sitemap
    assert evidence.has_head_metadata and evidence.has_open_graph
    assert evidence.has_typescript
    assert not evidence.has_database
    assert not evidence.has_api_routes
    assert evidence.navigation_model == "hybrid"


def test_saas_evidence() -> None:
    evidence = _evidence(SAAS)

    assert evidence.auth_provider == "next-auth"
    assert evidence.has_auth
    assert evidence.state_library == "zustand"
    assert evidence.has_global_state
    assert evidence.has_api_routes
    assert evidence.has_dashboard
    assert evidence.number_of_external_services == 1


def test_shop_evidence() -> None:
    evidence = _evidence(SHOP)

    assert evidence.has_checkout and evidence.has_cart and evidence.has_products
    assert evidence.payment_provider == "stripe"
    assert evidence.route_count == 4
    assert evidence.navigation_model == "multi-page"


def test_static_export_is_read_from_next_config() -> None:
    evidence = _evidence(
        {
            "package.json": package_json("next", "react", "tailwindcss"),
            "next.config.js": "module.exports = { output: 'export' }\n",
            "app/page.tsx": "'use client'\nexport default function Home() { return null }\n",
            "netlify.toml": "[build]\n",
        }
    )

    assert evidence.has_static_export
    assert evidence.has_tailwind
    assert evidence.styling_framework == "tailwindcss"
    assert evidence.has_client_components
    assert evidence.deployment_platform == "netlify"
    assert evidence.navigation_model == "one-page"


def test_backend_and_database_from_dependencies() -> None:
    evidence = _evidence(
        {
            "package.json": package_json("express", "prisma"),
            "server.js": "const express = require('express')\n",
        }
    )

    assert evidence.has_backend
    assert evidence.has_database
    assert evidence.dependency_count == 2
