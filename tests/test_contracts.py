import pytest

from contracts import BoundingBox, Frame, FrameResult, Position3D
from detect.simple_detector import CenterDetector, ReplayDetector


def test_contracts_instantiation() -> None:
    frame = Frame(
        camera_id="front",
        frame_index=1,
        t_capture_monotonic_ns=123,
        image=None,
        width=1280,
        height=720,
    )
    box = BoundingBox(x=10.0, y=20.0, width=30.0, height=40.0)
    position = Position3D(x=1.0, y=-0.5, z=12.0)
    result = FrameResult(
        frame_index=1,
        entries={0: box},
        camera_positions={0: position},
        vehicle_positions={0: position.translated(0.0, 0.0, 1.5)},
    )

    assert frame.camera_id == "front"
    assert box.centroid == (25.0, 40.0)
    assert position.as_tuple() == (1.0, -0.5, 12.0)
    assert result.vehicle_positions[0].z == 13.5
    assert result.evicted_ids == ()


def test_bounding_box_from_corners() -> None:
    box = BoundingBox.from_corners(10.0, 20.0, 50.0, 100.0)
    assert box == BoundingBox(x=10.0, y=20.0, width=40.0, height=80.0)
    assert box.centroid == (30.0, 60.0)


def test_bounding_box_rejects_negative_extent() -> None:
    with pytest.raises(ValueError):
        BoundingBox(x=0.0, y=0.0, width=-1.0, height=5.0)
    with pytest.raises(ValueError):
        BoundingBox.from_corners(50.0, 50.0, 40.0, 60.0)


def test_replay_detector_returns_scripted_boxes() -> None:
    box = BoundingBox(x=1.0, y=2.0, width=3.0, height=4.0)
    detector = ReplayDetector({2: [box]})

    def frame(index: int) -> Frame:
        return Frame("front", index, 0, None, 640, 480)

    assert detector.detect(frame(2)) == [box]
    assert detector.detect(frame(3)) == []


def test_center_detector_centers_box() -> None:
    detector = CenterDetector(box_width=20.0, box_height=10.0)
    boxes = detector.detect(Frame("front", 0, 0, None, 640, 480))
    assert len(boxes) == 1
    assert boxes[0].centroid == (320.0, 240.0)
