"""Core infrastructure shared by the constraint readers and writers.

- config: parser and writer configuration
- errors: structured parse/export errors
- result: per-element parse results and notices
"""

from .config import (
    ConstraintParserConfig,
    ConstraintWriterConfig,
    ENDPOINT_ORIGIN_TAGS,
    ENDPOINT_TAGS,
)

from .errors import (
    ConstraintErrorKind,
    ConstraintExportError,
    ConstraintParseError,
    PoseParseError,
    ScalarParseError,
    VectorParseError,
)

from .result import (
    ConstraintParseResult,
    ParseNotice,
)

__all__ = [
    # Configuration
    "ConstraintParserConfig",
    "ConstraintWriterConfig",
    "ENDPOINT_ORIGIN_TAGS",
    "ENDPOINT_TAGS",
    # Errors
    "ConstraintErrorKind",
    "ConstraintExportError",
    "ConstraintParseError",
    "PoseParseError",
    "ScalarParseError",
    "VectorParseError",
    # Results
    "ConstraintParseResult",
    "ParseNotice",
]
