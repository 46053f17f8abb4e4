import unittest
from pathlib import Path
import sys
import os
import tempfile

# Add scripts/ to path to import modules
sys.path.append(os.path.join(os.path.dirname(__file__), "../scripts"))

from scanner import ScanContext
from scanner.imports import (
    import_candidates,
    load_import_target,
    parse_imports,
    parse_specifiers,
    resolve_import_path,
)
from scanner.patterns import PATTERNS, is_exported_at, is_route_type
from scanner.repo_config import load_repo_config, strip_json_comments
from scanner.syntax import SourceFile
from scanner.tags import extract_tags, is_comment_line, split_tags


class TestImportPathResolver(unittest.TestCase):
    def test_relative_specifier(self):
        importer = Path("/proj/src/pages/App.tsx")
        self.assertEqual(resolve_import_path(importer, "./routes"), Path("/proj/src/pages/routes.tsx"))
        self.assertEqual(resolve_import_path(importer, "../config/routes"), Path("/proj/src/config/routes.tsx"))

    def test_recognized_extension_is_kept(self):
        importer = Path("/proj/src/App.tsx")
        self.assertEqual(resolve_import_path(importer, "./routes.ts"), Path("/proj/src/routes.ts"))
        self.assertEqual(resolve_import_path(importer, "./routes.config"), Path("/proj/src/routes.config.tsx"))

    def test_source_prefix_specifier(self):
        importer = Path("/proj/src/features/admin/Panel.tsx")
        self.assertEqual(
            resolve_import_path(importer, "src/routing/routes"),
            Path("/proj/src/routing/routes.tsx"),
        )

    def test_source_prefix_uses_project_root_outside_src(self):
        importer = Path("/proj/app/main.tsx")
        self.assertIsNone(resolve_import_path(importer, "src/routes"))
        self.assertEqual(
            resolve_import_path(importer, "src/routes", project_root=Path("/proj")),
            Path("/proj/src/routes.tsx"),
        )

    def test_bare_specifier_is_not_followed(self):
        importer = Path("/proj/src/App.tsx")
        self.assertIsNone(resolve_import_path(importer, "react-router-dom"))
        self.assertIsNone(resolve_import_path(importer, "@/routes"))
        self.assertEqual(import_candidates(importer, "react"), [])

    def test_candidates(self):
        importer = Path("/proj/src/App.tsx")
        candidates = import_candidates(importer, "./routes")
        self.assertEqual(candidates[0], Path("/proj/src/routes.tsx"))
        self.assertIn(Path("/proj/src/routes.js"), candidates)
        self.assertIn(Path("/proj/src/routes/index.ts"), candidates)
        self.assertEqual(len(candidates), len(set(candidates)))
        self.assertEqual(
            import_candidates(importer, "./routes.js"),
            [Path("/proj/src/routes.js"), Path("/proj/src/routes.ts"), Path("/proj/src/routes.tsx")],
        )

    def test_load_import_target_finds_index_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir).resolve()
            (root / "routes").mkdir()
            (root / "routes/index.ts").write_text("export const routes = [];\n", encoding="utf-8")
            ctx = ScanContext(root=root)
            target = load_import_target(ctx, root / "App.tsx", "./routes")
            self.assertIsNotNone(target)
            self.assertEqual(target.path, (root / "routes/index.ts").resolve())
            self.assertIsNone(load_import_target(ctx, root / "App.tsx", "./nowhere"))
            self.assertEqual(ctx.warnings, [])


class TestImportStatements(unittest.TestCase):
    def test_parse_specifiers(self):
        self.assertEqual(
            parse_specifiers(" routes, adminRoutes as admin, type RouteObject, "),
            {"routes": "routes", "admin": "adminRoutes"},
        )

    def test_parse_imports_in_file_order(self):
        source = SourceFile(
            path=Path("/proj/src/App.tsx"),
            text="""import React, { useMemo } from "react";
import type { RouteObject } from "react-router-dom";
import { routes as appRoutes } from "./routes";
import admin from "./admin";
""",
        )
        statements = parse_imports(source)
        self.assertEqual([s.source for s in statements], ["react", "./routes", "./admin"])
        self.assertEqual(statements[0].default, "React")
        self.assertEqual(statements[0].named, {"useMemo": "useMemo"})
        self.assertEqual(statements[1].exported_name("appRoutes"), "routes")
        self.assertTrue(statements[2].binds("admin"))
        self.assertEqual(statements[2].exported_name("admin"), "default")
        self.assertIsNone(statements[2].exported_name("routes"))


class TestTags(unittest.TestCase):
    def test_extract_tags(self):
        content = """// header
// @tags smoke, auth
const routes = [];
"""
        self.assertEqual(extract_tags(content, "const routes"), ["smoke", "auth"])
        self.assertEqual(extract_tags(content, "// header"), [])
        self.assertEqual(extract_tags(content, "missing"), [])

    def test_nearest_marker_wins(self):
        content = """// @tags outer
// @tags inner
{ path: "/x" }
"""
        self.assertEqual(extract_tags(content, '{ path: "/x" }'), ["inner"])

    def test_comment_lines(self):
        self.assertTrue(is_comment_line("   // note"))
        self.assertTrue(is_comment_line("  {/* @tags a */}"))
        self.assertFalse(is_comment_line("/* block */"))
        self.assertFalse(is_comment_line("const a = 1; // trailing"))

    def test_split_tags_drops_empty_pieces(self):
        self.assertEqual(split_tags(" a, ,b ,"), ["a", "b"])
        self.assertEqual(split_tags("smoke */}"), ["smoke"])


class TestPatterns(unittest.TestCase):
    def test_catalog_has_builder_shapes(self):
        for name in (
            "create_hash_router",
            "create_browser_router",
            "create_memory_router",
            "create_routes_from_elements",
        ):
            self.assertIn(name, PATTERNS)
            self.assertIn("builder", PATTERNS[name].groupindex)

    def test_route_element_does_not_match_routes_container(self):
        pattern = PATTERNS["route_element"]
        self.assertIsNone(pattern.search("<Routes>"))
        self.assertIsNone(pattern.search("<RouteGuard>"))
        self.assertIsNotNone(pattern.search('<Route path="/" />'))

    def test_router_link_skips_bound_targets(self):
        pattern = PATTERNS["router_link"]
        self.assertEqual(pattern.search('<router-link to="/about">').group("path"), "/about")
        self.assertEqual(pattern.search('<RouterLink class="x" to="/x">').group("path"), "/x")
        self.assertIsNone(pattern.search('<router-link :to="target">'))

    def test_is_exported_at(self):
        content = "export const a = [];\nconst b = [];\n"
        self.assertTrue(is_exported_at(content, content.index("const a")))
        self.assertFalse(is_exported_at(content, content.index("const b")))

    def test_is_route_type(self):
        self.assertTrue(is_route_type("RouteObject"))
        self.assertTrue(is_route_type("router.AppRoute"))
        self.assertFalse(is_route_type("string"))


class TestRepoConfig(unittest.TestCase):
    def test_strip_json_comments_keeps_strings(self):
        text = '{"a": "http://x", /* c */ "b": 1} // tail'
        self.assertEqual(strip_json_comments(text), '{"a": "http://x",  "b": 1} ')

    def test_load_repo_config_from_parent(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir).resolve()
            (root / "src").mkdir()
            (root / ".routemap.json").write_text(
                '{"extensions": ["tsx", ".ts"], "router_dir": "routing", "exclude_dirs": "legacy"}',
                encoding="utf-8",
            )
            warnings = []
            config, path = load_repo_config(root / "src", warnings)
            self.assertEqual(path, root / ".routemap.json")
            self.assertEqual(config["extensions"], [".tsx", ".ts"])
            self.assertEqual(config["router_dir"], "routing")
            self.assertEqual(config["exclude_dirs"], ["legacy"])
            self.assertEqual(warnings, [])


if __name__ == "__main__":
    unittest.main()
