"""Read every constraint of a robot document.

Each constraint-like child of the `<robot>` element is parsed independently.
Notices are logged at their own level; failed constraints are logged and
skipped, or re-raised, according to `ConstraintParserConfig.on_error`.

Usage:
    from kinconstraints.io.readers import ConstraintXMLReader

    reader = ConstraintXMLReader()
    constraints = reader.read(filepath=Path("robot.urdf"))
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from lxml import etree
from pydantic import Field

from kinconstraints.core.config import ConstraintParserConfig
from kinconstraints.core.errors import ConstraintErrorKind, ConstraintParseError
from kinconstraints.data.arbitrary_types_model import ArbitraryTypesModel
from kinconstraints.data.constraint_models import ConstraintSet
from kinconstraints.io.readers.constraint_reader import DOCUMENT_CONSTRAINT_TAGS, parse_constraint

logger = logging.getLogger(__name__)


def read_constraints(
    *,
    root: etree._Element,
    config: ConstraintParserConfig | None = None
) -> ConstraintSet:
    """Parse all constraint children of a robot element.

    Args:
        root: `<robot>` element
        config: Parser configuration (None = defaults)

    Returns:
        ConstraintSet in document order

    Raises:
        ConstraintParseError: On the first failure when config.on_error is "abort"
    """
    config = config or ConstraintParserConfig()
    if root.tag != "robot":
        logger.warning(f"Root tag is <{root.tag}>, expected <robot>")

    constraints = []
    seen_names: set[str] = set()
    n_skipped = 0

    for element in root.iterchildren(*DOCUMENT_CONSTRAINT_TAGS):
        result = parse_constraint(element=element, config=config)
        result.log_notices(logger=logger)

        error = result.error
        if error is None and result.constraint.name in seen_names:
            error = ConstraintParseError(
                kind=ConstraintErrorKind.DUPLICATE_NAME,
                detail="constraint name is not unique",
                constraint_name=result.constraint.name,
                field="name",
            )

        if error is not None:
            if config.on_error == "abort":
                raise error
            logger.error(f"Skipping constraint on line {element.sourceline}: {error}")
            n_skipped += 1
            continue

        seen_names.add(result.constraint.name)
        constraints.append(result.constraint)

    logger.info(f"Read {len(constraints)} constraints ({n_skipped} skipped)")
    return ConstraintSet(robot_name=root.get("name"), constraints=constraints)


def loads_constraints(
    text: str | bytes,
    *,
    config: ConstraintParserConfig | None = None
) -> ConstraintSet:
    """Parse constraints from an XML string.

    Raises:
        etree.XMLSyntaxError: If the text is not well-formed XML
    """
    if isinstance(text, str):
        text = text.encode("utf-8")
    root = etree.fromstring(text)
    return read_constraints(root=root, config=config)


class BaseReader(ArbitraryTypesModel, ABC):
    """Abstract base class for file readers.

    Subclasses implement format-specific reading logic.
    """

    last_read_path: Path | None = None

    @abstractmethod
    def read(self, *, filepath: Path) -> ConstraintSet:
        """Read constraints from file.

        Args:
            filepath: Path to file

        Returns:
            ConstraintSet
        """
        pass

    def can_read(self, *, filepath: Path) -> bool:
        """Check if this reader can read the file.

        Args:
            filepath: Path to file

        Returns:
            True if the file exists
        """
        return filepath.exists()

    def validate_file(self, *, filepath: Path) -> None:
        """Validate that file exists and is readable.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a non-empty file
        """
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")

        if filepath.stat().st_size == 0:
            raise ValueError(f"File is empty: {filepath}")


class ConstraintXMLReader(BaseReader):
    """Reader for URDF / XML robot documents carrying constraints."""

    config: ConstraintParserConfig = Field(default_factory=ConstraintParserConfig)
    extensions: tuple[str, ...] = (".urdf", ".xml")

    def can_read(self, *, filepath: Path) -> bool:
        """Check if file is a URDF or XML document."""
        return filepath.suffix.lower() in self.extensions and filepath.exists()

    def read(self, *, filepath: Path) -> ConstraintSet:
        """Read all constraints of a robot document.

        Args:
            filepath: Path to URDF / XML file

        Returns:
            ConstraintSet
        """
        filepath = Path(filepath)
        self.validate_file(filepath=filepath)

        logger.info(f"Reading constraints from {filepath.name}")
        tree = etree.parse(str(filepath))
        constraint_set = read_constraints(root=tree.getroot(), config=self.config)

        self.last_read_path = filepath
        return constraint_set


def load_constraints(
    *,
    filepath: Path,
    config: ConstraintParserConfig | None = None
) -> ConstraintSet:
    """Load constraints from a URDF / XML file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    reader = ConstraintXMLReader(config=config or ConstraintParserConfig())
    return reader.read(filepath=Path(filepath))
