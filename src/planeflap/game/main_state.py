"""Flappy plane: fly between the pipes."""

import logging
from typing import Optional

from planeflap.core.events import Event, EventType
from planeflap.core.state import State
from planeflap.engine.game import GameContext
from planeflap.engine.input import Keys
from planeflap.engine.scale import ScaleMode
from planeflap.engine.sprites import Group, Sprite, Text
from planeflap.engine.timer import TimerEvent
from planeflap.audio.engine import SoundEffect
from planeflap.graphics.sprites import make_pipe, make_plane_frames

logger = logging.getLogger(__name__)


class MainState:
    """The only game state.

    Spawns a row of pipes every ROW_INTERVAL ms, pulls the plane down
    with gravity and lets the player jump. Hitting a pipe freezes the
    scene; leaving the screen vertically restarts the state.
    """

    name = "Main"

    BACKGROUND = "#71c5cf"

    GRAVITY = 1000.0
    JUMP_VELOCITY = -350.0
    JUMP_ANGLE = -20
    JUMP_TWEEN_MS = 100
    MAX_ANGLE = 20
    ANGLE_STEP = 1

    PLANE_X = 100
    PLANE_Y = 245
    PLANE_W = 50
    PLANE_H = 43
    PLANE_ANCHOR = (-0.2, 0.5)
    MOTOR_FRAMES = [0, 1, 2, 1]
    MOTOR_FPS = 30

    PIPE_W = 50
    PIPE_H = 50
    PIPE_SPEED = -200.0
    PIPE_SPAWN_X = 400
    PIPE_SLOTS = 8
    PIPE_SPACING = 60
    PIPE_TOP = 10
    ROW_INTERVAL = 1500

    JUMP_VOLUME = 0.2

    def __init__(self, context: GameContext):
        self.context = context
        self.plane: Optional[Sprite] = None
        self.pipes: Optional[Group] = None
        self.timer: Optional[TimerEvent] = None
        self.label_score: Optional[Text] = None
        self.jump_sound: Optional[SoundEffect] = None
        self.score = 0

    def preload(self) -> None:
        ctx = self.context

        if not ctx.desktop:
            ctx.scale.scale_mode = ScaleMode.SHOW_ALL
            ctx.scale.set_min_max(ctx.width // 2, ctx.height // 2, ctx.width, ctx.height)

        ctx.scale.page_align_horizontally = True
        ctx.scale.page_align_vertically = True

        ctx.stage.set_background_color(self.BACKGROUND)

        ctx.load.image("pipe", "pipe.png", lambda: make_pipe(self.PIPE_W, self.PIPE_H))
        ctx.load.audio_file("jump", "jump.wav")
        ctx.load.spritesheet(
            "plane", "plane_scaled.png", self.PLANE_W, self.PLANE_H,
            lambda: make_plane_frames(self.PLANE_W, self.PLANE_H),
        )

    def create(self) -> None:
        ctx = self.context

        self.pipes = ctx.add.group("pipes")
        self.timer = ctx.time.loop(self.ROW_INTERVAL, self.add_row_of_pipes)

        self.plane = ctx.add.sprite(self.PLANE_X, self.PLANE_Y, "plane")
        self.plane.frame = 0
        ctx.physics.enable(self.plane)
        self.plane.body.gravity.y = self.GRAVITY

        self.plane.animations.add("motor", self.MOTOR_FRAMES, self.MOTOR_FPS, loop=True)
        self.plane.animations.play("motor")

        self.plane.anchor.set_to(*self.PLANE_ANCHOR)

        space_key = ctx.input.add_key(Keys.SPACEBAR)
        space_key.on_down(self.jump)
        ctx.input.on_down(self.jump)

        self.score = 0
        self.label_score = ctx.add.text(20, 20, "0", size=30, color="#ffffff")

        self.jump_sound = ctx.sound.add("jump", volume=self.JUMP_VOLUME)

    def update(self) -> None:
        ctx = self.context

        if self.plane.y < 0 or self.plane.y > ctx.height:
            self.restart_game()

        ctx.physics.overlap(self.plane, self.pipes, self.hit_pipe)

        # Nose slowly drops
        if self.plane.angle < self.MAX_ANGLE:
            self.plane.angle += self.ANGLE_STEP

    def jump(self) -> None:
        if not self.plane.alive:
            return

        self.plane.body.velocity.y = self.JUMP_VELOCITY
        self.context.tweens.tween(
            self.plane, {"angle": self.JUMP_ANGLE}, self.JUMP_TWEEN_MS, name="jump"
        )
        self.jump_sound.play()

        self.context.event_bus.emit(Event(
            EventType.PLAYER_JUMPED, data={"y": self.plane.y}, source="main"
        ))

    def hit_pipe(self, plane: Optional[Sprite] = None, pipe: Optional[Sprite] = None) -> None:
        if not self.plane.alive:
            return

        self.plane.alive = False
        self.context.time.remove(self.timer)

        def freeze(p: Sprite) -> None:
            p.body.velocity.x = 0

        self.pipes.for_each(freeze)

        self.context.flow.transition(State.DEAD, last_score=self.score)
        logger.info(f"Plane hit a pipe, score {self.score}")
        self.context.event_bus.emit(Event(
            EventType.PLAYER_DIED, data={"score": self.score}, source="main"
        ))

    def restart_game(self) -> None:
        if self.context.state.pending is None:
            logger.info(f"Plane left the screen, restarting (score {self.score})")
        self.context.flow.context.last_score = self.score
        self.context.state.start(self.name)

    def add_one_pipe(self, x: float, y: float) -> Sprite:
        ctx = self.context
        pipe = ctx.add.sprite(x, y, "pipe", group=self.pipes)
        ctx.physics.enable(pipe)

        pipe.body.velocity.x = self.PIPE_SPEED

        pipe.check_world_bounds = True
        pipe.out_of_bounds_kill = True
        return pipe

    def add_row_of_pipes(self) -> None:
        hole = self.context.rng.randint(1, 5)

        for i in range(self.PIPE_SLOTS):
            if i != hole and i != hole + 1:
                self.add_one_pipe(self.PIPE_SPAWN_X, i * self.PIPE_SPACING + self.PIPE_TOP)

        self.score += 1
        self.label_score.text = str(self.score)

        logger.debug(f"Row spawned, gap at {hole}, score {self.score}")
        self.context.event_bus.emit(Event(
            EventType.ROW_SPAWNED, data={"score": self.score, "hole": hole}, source="main"
        ))
