from __future__ import annotations

TREE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")

# Recognised by the import resolver; anything else gets DEFAULT_EXTENSION appended.
RECOGNIZED_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")
DEFAULT_EXTENSION = ".tsx"
CANDIDATE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js", ".mjs", ".cjs")

TYPESCRIPT_EXTENSIONS = (".ts", ".mts", ".cts")

SOURCE_PREFIX = "src/"

ROUTES_FILE_NAMES = ("routes.tsx", "routes.ts", "routes.jsx", "routes.js")

TEMPLATE_EXTENSIONS = (".vue",)
ROUTER_DIR = "router"
ROUTER_CONFIG_EXTENSIONS = (".js", ".ts")

PARAM_MARKER = ":"

EXCLUDE_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "bower_components",
    ".next",
    ".nuxt",
    ".output",
    ".vercel",
    ".turbo",
    ".cache",
    "coverage",
    "dist",
    "build",
    "out",
}

NOISE_FILE_SUFFIXES = (
    ".d.ts",
    ".min.js",
)

ROUTEMAP_CONFIG_FILES = ("routemap.json", ".routemap.json")
