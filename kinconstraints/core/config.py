"""Configuration for reading and writing constraint elements.

This module provides configuration classes used by the readers and writers:
- ConstraintParserConfig: endpoint tag scheme and document error policy
- ConstraintWriterConfig: endpoint tag scheme and output formatting
"""

from dataclasses import dataclass
from typing import Literal

EndpointScheme = Literal["predecessor_successor", "parent_child"]

ENDPOINT_TAGS: dict[EndpointScheme, tuple[str, str]] = {
    "predecessor_successor": ("predecessor", "successor"),
    "parent_child": ("parent", "child"),
}

# Joint constraints carry their endpoint origins directly under the constraint element
ENDPOINT_ORIGIN_TAGS: dict[EndpointScheme, tuple[str, str]] = {
    "predecessor_successor": ("predecessor_origin", "successor_origin"),
    "parent_child": ("parent_origin", "child_origin"),
}


@dataclass
class ConstraintParserConfig:
    """Configuration for the constraint reader.

    Attributes:
        endpoint_scheme: Which endpoint tag pair to read. "auto" uses
            predecessor/successor when either tag is present, otherwise
            parent/child.
        on_error: Document-level policy when one constraint fails to parse.
            "skip" logs and drops it, "abort" re-raises.
    """

    endpoint_scheme: EndpointScheme | Literal["auto"] = "auto"
    on_error: Literal["skip", "abort"] = "skip"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.endpoint_scheme not in ("auto", *ENDPOINT_TAGS):
            raise ValueError(f"Unknown endpoint scheme: {self.endpoint_scheme}")
        if self.on_error not in ("skip", "abort"):
            raise ValueError(f"on_error must be 'skip' or 'abort', got {self.on_error}")


@dataclass
class ConstraintWriterConfig:
    """Configuration for the constraint writer.

    Attributes:
        endpoint_scheme: Endpoint tag pair to emit
        pretty_print: Indent serialized documents
    """

    endpoint_scheme: EndpointScheme = "predecessor_successor"
    pretty_print: bool = True

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.endpoint_scheme not in ENDPOINT_TAGS:
            raise ValueError(f"Unknown endpoint scheme: {self.endpoint_scheme}")

    @property
    def endpoint_tags(self) -> tuple[str, str]:
        return ENDPOINT_TAGS[self.endpoint_scheme]

    @property
    def endpoint_origin_tags(self) -> tuple[str, str]:
        return ENDPOINT_ORIGIN_TAGS[self.endpoint_scheme]
