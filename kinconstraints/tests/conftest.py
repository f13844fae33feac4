"""Pytest configuration and fixtures for kinconstraints tests.

Provides reusable fixtures for:
- Building lxml elements from XML snippets
- Sample constraint documents
- Temporary directories
"""

import shutil
import tempfile
from pathlib import Path
from typing import Callable

import pytest
from lxml import etree


@pytest.fixture
def temp_dir() -> Path:
    """Create temporary directory for tests.

    Yields:
        Path to temporary directory (auto-cleaned up)
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp)


@pytest.fixture
def make_element() -> Callable[[str], etree._Element]:
    """Factory turning an XML snippet into an element.

    Returns:
        Function mapping XML text to its root element
    """
    def _make(text: str) -> etree._Element:
        return etree.fromstring(text.strip().encode("utf-8"))
    return _make


@pytest.fixture
def loop_xml() -> str:
    """Revolute loop constraint with both origins and an axis."""
    return """
<loop_joint name="closure" type="revolute">
  <predecessor link="link_a">
    <origin xyz="0.1 0.2 0.3" rpy="0 0 1.5707963267948966"/>
  </predecessor>
  <successor link="link_b">
    <origin xyz="-0.5 0 0"/>
  </successor>
  <axis xyz="0 0 1"/>
</loop_joint>
"""


@pytest.fixture
def coupling_xml() -> str:
    """Coupling constraint with a ratio."""
    return """
<coupling name="belt">
  <predecessor link="pulley_a"/>
  <successor link="pulley_b"/>
  <ratio value="-2.5"/>
</coupling>
"""


@pytest.fixture
def joint_xml() -> str:
    """Joint constraint with parent/child endpoints and origins."""
    return """
<constraint name="gear" gear_ratio="3.0">
  <parent link="motor"/>
  <child link="wheel"/>
  <pos_axis xyz="0 1 0"/>
  <rot_axis xyz="0 0 1"/>
  <parent_origin xyz="1 2 3"/>
</constraint>
"""


@pytest.fixture
def robot_xml(loop_xml: str, coupling_xml: str, joint_xml: str) -> str:
    """Robot document with one constraint of each class plus links."""
    return f"""<?xml version="1.0"?>
<robot name="test_robot">
  <link name="link_a"/>
  <link name="link_b"/>
  {loop_xml}
  {coupling_xml}
  {joint_xml}
</robot>
"""


@pytest.fixture
def create_robot_file(temp_dir: Path, robot_xml: str) -> Path:
    """Write the sample robot document to disk."""
    filepath = temp_dir / "robot.urdf"
    filepath.write_text(robot_xml, encoding="utf-8")
    return filepath
