"""Schema Source — reads the SDL file the service materializes.

Invariants:
    - Read once at startup; unreadable files raise SchemaLoadError
"""

from pathlib import Path

from materializer.core.errors import SchemaLoadError


def load_schema_source(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(str(path), e.strerror or type(e).__name__) from e
