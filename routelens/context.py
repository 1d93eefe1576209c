import logging
from dataclasses import dataclass, field

# Resolution order for extension-less import specifiers
DEFAULT_EXTENSIONS = ('.ts', '.js', '.tsx', '.mjs', '.cjs')


@dataclass
class AnalysisContext:
    """
    State shared by one analysis run.

    Carries the logger and the per-path cache of parsed files so that
    import following never re-reads a file. One context per run; nothing
    here is global.
    """
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger('routelens'))
    exclude_dirs: set = field(default_factory=lambda: {'node_modules'})
    extensions: tuple = DEFAULT_EXTENSIONS
    # abs path -> ParsedFile, or None when the file failed to read/parse
    parse_cache: dict = field(default_factory=dict)

    def is_excluded(self, path: str) -> bool:
        parts = path.replace('\\', '/').split('/')
        return any(p in self.exclude_dirs for p in parts)
