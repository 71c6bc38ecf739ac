# turtlekit

Plain-Python building blocks for a small differential-drive robot: message
types, velocity controllers, a waypoint follower, and processing for laser
scans, IMU, odometry and camera data. Every piece takes message objects (and,
where timing matters, the current time in seconds) and hands results back, so
it can be driven from any transport, a recorded log, or a test.

## What is inside

- `turtlekit.messages` – dataclasses for the messages everything else uses:
  `Stamp` (with `nanoseconds()`, `seconds()` and `Stamp.from_nanoseconds()`),
  `Header`, `Vector3`, `Point`, `Quaternion`, `Pose`, `Twist`,
  `TwistStamped`, `Odometry`, `Imu`, `LaserScan`, `Image` and `CameraInfo`.
- `turtlekit.geometry` – `quaternion_to_euler` (roll, pitch, yaw in radians
  from the rotation matrix), `direct_euler` (a closed-form variant),
  `yaw_degrees`, quaternion `slerp` and `clamp`.
- `turtlekit.teleop` – `VelocityController`, which gives a fixed linear and
  angular speed while moving and zero while stopped; it is switched with
  `set_moving()` (returning a `ControlResponse`) or `apply_parameters()`, and
  `command()` builds the stamped command. `KeyboardTeleop.handle_key()` maps
  `w`/`s`/`a`/`d`/`x` (either case) to forward, back, left, right and stop,
  and `h` to the help text from `usage_lines()`.
- `turtlekit.motion_sequence` – `MotionController`, which runs one timed move
  at a time (`move_for_time`, `move_distance`, `rotate`, `stop`), reports the
  command to send on each `tick(now)`, and lists a demonstration sequence with
  `demo_schedule()`.
- `turtlekit.waypoints` – `WaypointFollower`, a turn-then-drive controller that
  visits a list of `Waypoint`s in order using `update_odometry()` and
  `step()`; also `planar_yaw` and `wrap_angle`.
- `turtlekit.scan` – `index_for_angle`, `sample_directions`, `probe_indices`
  and `is_clear` for reading a `LaserScan`, and `filter_scan`, which sets
  out-of-range, too-near and jumpy readings to infinity.
- `turtlekit.imu` – `format_imu`, `ImuCsvLogger` for writing IMU samples to
  CSV at most once per interval, `MovingAverage`, and `MotionDetector`, which
  decides moving/stopped from smoothed acceleration and angular speed and
  returns a `MotionEvent` when the accepted state changes.
- `turtlekit.odometry` – `describe_odometry`, `RobotState`, `MonitorConfig`
  and `OdomMonitor`, which checks a motion boundary and speed limits, can
  produce a stop command, records the trajectory to CSV, and returns an
  `OdomReport` for each message.
- `turtlekit.camera` – `describe_image` and `describe_camera_info` summaries,
  `stamp_difference_ns`, and `check_depth_center`, a centre-pixel obstacle
  check on depth data returning an `ObstacleCheck`.
- `turtlekit.fusion` – `ImuOdomFusion`, a complementary IMU/odometry filter;
  `ImuLowPass`; and `SensorPreprocessor`, which filters a scan, low-passes
  the IMU sample and passes odometry through.
- `turtlekit.polygons` – `Square` and `Triangle` (both `RegularPolygon`s)
  created by name with `create_polygon`, which raises `PolygonLoadError` for
  an unknown name.

## Command line

The package installs one command, which builds a triangle and a square with
side length 10 and prints their areas:

```
turtlekit-area
```

```
Triangle area: 43.30
Square area: 100.00
```

## A short example

```python
from turtlekit.geometry import clamp
from turtlekit.waypoints import wrap_angle

clamp(0.9, -0.5, 0.5)      # 0.5
wrap_angle(4.0)            # 4.0 - 2π, back into [-π, π]
```

## What it does not do

- It does not publish or subscribe to anything: there is no messaging
  middleware, no timers and no node runner. The caller feeds messages in,
  supplies the current time, and sends the returned commands itself.
- It does not read the keyboard: `KeyboardTeleop` only interprets keys it is
  given.
- It does not decode, convert or display images; the camera helpers work on
  message fields and on depth values already given as rows of numbers.

## Tests

The test suite uses pytest; install the `test` extra and run pytest from the
project directory.