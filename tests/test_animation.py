import pytest

from planeflap.animation import AnimationEngine, Easing, Timeline
from planeflap.animation.easing import get_easing
from planeflap.animation.frames import FrameAnimation, SpriteAnimations


class Target:
    def __init__(self):
        self.angle = 0.0


def test_tween_moves_attribute_linearly_and_finishes():
    engine = AnimationEngine()
    target = Target()
    done = []
    engine.tween(target, {"angle": -20}, 100, name="jump", on_complete=lambda: done.append(1))

    engine.update(50)
    assert target.angle == pytest.approx(-10)

    engine.update(50)
    assert target.angle == -20
    assert done == [1]
    assert not engine.has_animation("jump")


def test_tween_with_same_name_replaces_running_one():
    engine = AnimationEngine()
    target = Target()
    engine.tween(target, {"angle": -20}, 100, name="jump")
    engine.update(50)

    engine.tween(target, {"angle": -20}, 100, name="jump")
    assert engine.animation_count == 1
    engine.update(50)
    assert target.angle == pytest.approx(-15)


def test_stop_group_and_stop_all():
    engine = AnimationEngine()
    engine.tween(Target(), {"angle": 10}, 100, name="a", group="ui")
    engine.tween(Target(), {"angle": 10}, 100, name="b", group="ui")
    engine.tween(Target(), {"angle": 10}, 100, name="c")

    assert engine.stop_group("ui") == 2
    assert engine.stop_all() == 1
    assert engine.animation_count == 0


def test_timeline_easing_comes_from_end_keyframe():
    timeline = Timeline.tween({"y": 0.0}, {"y": 100.0}, 100, Easing.EASE_IN_QUAD)
    timeline.play()
    values = timeline.update(50)
    assert values["y"] == pytest.approx(25)


def test_timeline_interpolates_tuples():
    timeline = Timeline(name="move", duration=100)
    timeline.add_track("pos").add_keyframe(0.0, (0, 0)).add_keyframe(1.0, (10, 20))
    timeline.play()
    assert timeline.update(50)["pos"] == pytest.approx((5, 10))


def test_looping_timeline_wraps():
    timeline = Timeline(name="spin", duration=100, loop=True)
    timeline.add_track("angle").add_keyframe(0.0, 0.0).add_keyframe(1.0, 360.0)
    timeline.play()
    timeline.update(150)
    assert timeline.progress == pytest.approx(0.5)
    assert timeline.is_playing


def test_get_easing_by_name():
    assert get_easing("ease_out_quad")(0.5) == pytest.approx(0.75)
    with pytest.raises(ValueError):
        get_easing("wobble")


def test_frame_animation_loops():
    anim = FrameAnimation("motor", [0, 1, 2, 1], frame_rate=10, loop=True)
    anim.play()
    frames = [anim.update(100) for _ in range(5)]
    assert frames == [1, 2, 1, 0, 1]


def test_frame_animation_without_loop_holds_last_frame():
    anim = FrameAnimation("once", [0, 1, 2], frame_rate=10)
    anim.play()
    assert anim.update(1000) == 2
    assert not anim.is_playing


def test_sprite_animations_switch():
    animations = SpriteAnimations()
    animations.add("motor", [0, 1, 2, 1], 30, loop=True)
    animations.add("idle", [0], 1)
    assert animations.update(100) is None

    motor = animations.play("motor")
    idle = animations.play("idle")
    assert not motor.is_playing
    assert animations.current is idle


def test_frame_animation_needs_frames():
    animations = SpriteAnimations()
    with pytest.raises(ValueError):
        animations.add("empty", [])
    assert animations.current is None
