"""Tests for reading and writing whole robot documents."""

import logging
from pathlib import Path

import pytest
from lxml import etree

from kinconstraints.core.config import ConstraintParserConfig
from kinconstraints.core.errors import ConstraintErrorKind, ConstraintParseError
from kinconstraints.data.constraint_models import (
    ConstraintClass,
    CouplingConstraint,
    JointConstraint,
    LoopConstraint,
)
from kinconstraints.io.readers.document_reader import (
    ConstraintXMLReader,
    load_constraints,
    loads_constraints,
    read_constraints,
)
from kinconstraints.io.writers.constraint_writer import ConstraintXMLWriter, dumps_constraints


BROKEN_ROBOT = """
<robot name="broken">
  <coupling name="good"><ratio value="1"/></coupling>
  <coupling name="bad"><ratio value="abc"/></coupling>
  <coupling name="good"/>
  <link name="ignored"/>
</robot>
"""


ROS_CONTROL_ROBOT = """
<robot name="arm">
  <transmission name="shoulder_trans">
    <type>transmission_interface/SimpleTransmission</type>
    <joint name="shoulder"><hardwareInterface>EffortJointInterface</hardwareInterface></joint>
    <actuator name="shoulder_motor"><mechanicalReduction>50</mechanicalReduction></actuator>
  </transmission>
  <coupling name="belt"><ratio value="2"/></coupling>
</robot>
"""


class TestReadConstraints:
    """Test document-level reading."""

    def test_reads_all_classes(self, robot_xml: str) -> None:
        """Should read one constraint of each class in document order."""
        constraints = loads_constraints(robot_xml)

        assert constraints.robot_name == "test_robot"
        assert constraints.names == ["closure", "belt", "gear"]
        assert isinstance(constraints.get(name="closure"), LoopConstraint)
        assert isinstance(constraints.get(name="belt"), CouplingConstraint)
        assert isinstance(constraints.get(name="gear"), JointConstraint)
        assert len(constraints.by_class(class_type=ConstraintClass.LOOP)) == 1

    def test_skip_policy(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should log and skip invalid and duplicate constraints."""
        with caplog.at_level(logging.ERROR):
            constraints = loads_constraints(BROKEN_ROBOT)

        assert constraints.names == ["good"]
        assert constraints.get(name="good").ratio == 1.0
        assert "invalid_ratio_value" in caplog.text
        assert "duplicate_name" in caplog.text

    def test_abort_policy(self) -> None:
        """Should raise the first failure."""
        with pytest.raises(ConstraintParseError) as exc_info:
            loads_constraints(BROKEN_ROBOT, config=ConstraintParserConfig(on_error="abort"))

        assert exc_info.value.kind is ConstraintErrorKind.INVALID_RATIO_VALUE
        assert exc_info.value.constraint_name == "bad"

    def test_notices_are_logged(self, make_element, caplog: pytest.LogCaptureFixture) -> None:
        """Should log notices at their own level."""
        root = make_element('<robot><coupling name="c"><predecessor/></coupling></robot>')
        with caplog.at_level(logging.DEBUG):
            read_constraints(root=root)

        levels = {record.levelno for record in caplog.records if "[c]" in record.getMessage()}
        assert logging.INFO in levels
        assert logging.DEBUG in levels

    def test_get_unknown_name(self, robot_xml: str) -> None:
        """Should raise KeyError for unknown names."""
        with pytest.raises(KeyError):
            loads_constraints(robot_xml).get(name="missing")

    def test_ignores_ros_control_transmissions(self) -> None:
        """Should not read ros_control transmission elements as couplings."""
        constraints = loads_constraints(ROS_CONTROL_ROBOT)

        assert constraints.names == ["belt"]
        assert isinstance(constraints.get(name="belt"), CouplingConstraint)


class TestFileIO:
    """Test file reading and writing."""

    def test_load_file(self, create_robot_file: Path) -> None:
        """Should load constraints from disk."""
        constraints = load_constraints(filepath=create_robot_file)
        assert constraints.n_constraints == 3

    def test_missing_file(self, temp_dir: Path) -> None:
        """Should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_constraints(filepath=temp_dir / "missing.urdf")

    def test_reader_can_read(self, create_robot_file: Path, temp_dir: Path) -> None:
        """Should accept existing URDF / XML files only."""
        reader = ConstraintXMLReader()

        assert reader.can_read(filepath=create_robot_file) is True
        assert reader.can_read(filepath=temp_dir / "robot.csv") is False

        reader.read(filepath=create_robot_file)
        assert reader.last_read_path == create_robot_file

    def test_write_then_read(self, robot_xml: str, temp_dir: Path) -> None:
        """Should write a document that reads back to the same constraints."""
        constraints = loads_constraints(robot_xml)
        filepath = temp_dir / "out" / "constraints.urdf"

        writer = ConstraintXMLWriter()
        writer.write(filepath=filepath, constraints=constraints)
        reloaded = load_constraints(filepath=filepath)

        assert writer.last_write_path == filepath
        assert reloaded.robot_name == "test_robot"
        assert reloaded.names == constraints.names
        assert reloaded.get(name="belt").ratio == -2.5
        assert reloaded.get(name="gear").gear_ratio == 3.0

    def test_dumps(self, robot_xml: str) -> None:
        """Should serialize to a parseable string."""
        text = dumps_constraints(constraints=loads_constraints(robot_xml))
        root = etree.fromstring(text.encode("utf-8"))

        assert root.tag == "robot"
        assert [child.tag for child in root] == ["loop_joint", "coupling", "constraint"]
