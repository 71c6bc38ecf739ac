import pytest

from turtlekit.camera import (
    ObstacleCheck,
    check_depth_center,
    describe_camera_info,
    describe_image,
    stamp_difference_ns,
)
from turtlekit.messages import CameraInfo, Header, Image, Stamp


def test_stamp_difference_zero_for_equal():
    assert stamp_difference_ns(Stamp(5, 100), Stamp(5, 100)) == 0


def test_stamp_difference_symmetric():
    a = Stamp(10, 200)
    b = Stamp(9, 999_999_900)
    assert stamp_difference_ns(a, b) == stamp_difference_ns(b, a)
    assert stamp_difference_ns(a, b) == a.nanoseconds() - b.nanoseconds()


def test_stamp_difference_across_second_boundary():
    a = Stamp(2, 0)
    b = Stamp(1, 999_999_999)
    assert stamp_difference_ns(a, b) == 1


def test_describe_image_fields():
    image = Image(
        header=Header(stamp=Stamp(4, 12), frame_id="camera_rgb_optical_frame"),
        height=480,
        width=640,
        encoding="rgb8",
        step=1920,
    )
    text = describe_image(image)
    assert text.startswith("/camera/image_raw 数据:")
    assert "frame_id:camera_rgb_optical_frame" in text
    assert "Time:4 s,000000012 ns" in text
    assert "height:480 ,width:640" in text
    assert "encoding: rgb8" in text
    assert "step: 1920" in text


def test_describe_camera_info_contains_matrix():
    info = CameraInfo(
        header=Header(frame_id="cam"),
        width=640,
        height=480,
        d=[0.0] * 5,
        k=[500.0, 0.0, 320.0, 0.0, 500.0, 240.0, 0.0, 0.0, 1.0],
    )
    text = describe_camera_info(info)
    assert "图像宽度: 640, 高度: 480" in text
    assert "500.00, 0.00, 320.00; 0.00, 500.00, 240.00" in text


def test_describe_camera_info_requires_distortion():
    with pytest.raises(ValueError):
        describe_camera_info(CameraInfo(d=[0.1, 0.2]))


def _depth(center):
    return [[3.0, 3.0, 3.0], [3.0, center, 3.0], [3.0, 3.0, 3.0]]


def test_depth_obstacle_detected():
    assert check_depth_center(_depth(0.3)) == ObstacleCheck(0.3, True)


def test_depth_clear_when_far():
    result = check_depth_center(_depth(2.0))
    assert result.obstacle is False
    assert result.distance == 2.0


def test_depth_ignores_invalid_readings():
    assert check_depth_center(_depth(0.005)).obstacle is False


def test_depth_custom_threshold():
    assert check_depth_center(_depth(2.0), safety_distance=2.5).obstacle is True


def test_depth_empty_raises():
    with pytest.raises(ValueError):
        check_depth_center([])