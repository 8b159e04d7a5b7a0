"""SourceKitten identifiers and lint vocabulary shared across rules."""

SOURCEKITTEN_SYNTAX_PREFIX: str = "source.lang.swift.syntaxtype."
SOURCEKITTEN_DECL_PREFIX: str = "source.lang.swift.decl."

AVAILABLE_ATTRIBUTE: str = "source.decl.attribute.available"

ACCESS_CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {"private", "fileprivate", "internal", "public", "open"}
)

# Canonical platform name -> names accepted in source text.
PLATFORM_ALIASES: dict[str, tuple[str, ...]] = {
    "iOS": ("iOS",),
    "macOS": ("macOS", "OSX"),
    "tvOS": ("tvOS",),
    "watchOS": ("watchOS",),
}

AVAILABILITY_CONDITION_PATTERN: str = r"#available\s*\([^\(]+\)"

CONFIG_FILE_NAME: str = ".declint.yml"
PYPROJECT_TOOL_SECTION: str = "declint"
SOURCEKITTEN_SIDECAR_SUFFIX: str = ".sourcekitten.json"
