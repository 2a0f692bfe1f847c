from conftest import make_game

from planeflap.core.events import EventType, key_down_event, pointer_down_event
from planeflap.core.state import State
from planeflap.engine.scale import ScaleMode


def test_create_sets_up_the_scene(game):
    state = game.state.current
    assert state.plane.x == 100 and state.plane.y == 245
    assert (state.plane.anchor.x, state.plane.anchor.y) == (-0.2, 0.5)
    assert state.plane.body.gravity.y == 1000
    assert state.score == 0
    assert state.label_score.text == "0"
    assert len(state.pipes) == 0
    assert game.time.length == 1
    assert game.flow.state == State.PLAYING
    assert game.stage.background_color == (0x71, 0xC5, 0xCF)


def test_missing_asset_files_fall_back_to_generated_art(game):
    assert game.cache.frame_size("pipe") == (50, 50)
    assert game.cache.frame_size("plane") == (50, 43)
    assert len(game.cache.get_frames("plane")) == 3


def test_plane_stays_alive_while_in_bounds(game):
    state = game.state.current
    for _ in range(20):
        game.step(16)
    assert state.plane.alive
    assert game.state.current is state
    assert 245 < state.plane.y < 490
    assert state.score == 0


def test_row_every_interval_adds_one_point(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    spawned = []
    game.event_bus.subscribe(EventType.ROW_SPAWNED, lambda e: spawned.append(e.data["score"]))

    game.step(1499)
    assert state.score == 0

    game.step(1)
    assert state.score == 1
    assert state.label_score.text == "1"

    game.step(1500)
    assert state.score == 2
    assert spawned == [1, 2]
    assert len(state.pipes) == 12


def test_long_frame_spawns_a_single_row(tmp_path):
    game = make_game(tmp_path)
    game.step(0)
    state = game.state.current
    state.plane.body.gravity.y = 0

    game.step(3000)
    assert state.score == 1
    ys = sorted(p.y for p in state.pipes)
    assert len(ys) == 6
    assert len(set(ys)) == 6


def test_row_has_six_pipes_around_the_gap(game):
    state = game.state.current
    state.add_row_of_pipes()

    pipes = list(state.pipes)
    assert len(pipes) == 6
    assert all(p.x == 400 for p in pipes)
    # Gap at slots 3 and 4
    assert sorted(p.y for p in pipes) == [10, 70, 130, 310, 370, 430]
    assert all(p.body.velocity.x == -200 for p in pipes)
    assert all(p.check_world_bounds and p.out_of_bounds_kill for p in pipes)


def test_gap_slot_comes_from_the_rng(tmp_path):
    game = make_game(tmp_path, hole=1)
    game.step(0)
    state = game.state.current
    state.add_row_of_pipes()
    assert sorted(p.y for p in state.pipes) == [10, 190, 250, 310, 370, 430]


def test_new_pipe_at_right_edge_survives(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    pipe = state.add_one_pipe(400, 10)

    game.step(16)
    assert pipe.alive
    assert pipe.in_world


def test_pipe_leaving_left_edge_is_removed(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    pipe = state.add_one_pipe(0, 400)

    game.step(16)
    assert pipe.alive

    game.step(300)
    assert not pipe.alive
    assert len(state.pipes) == 0


def test_hitting_a_pipe_kills_the_plane(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    died = []
    game.event_bus.subscribe(EventType.PLAYER_DIED, lambda e: died.append(e.data["score"]))
    pipe = state.add_one_pipe(120, 230)

    game.step(0)

    assert not state.plane.alive
    assert state.plane.exists
    assert pipe.body.velocity.x == 0
    assert game.time.length == 0
    assert game.flow.state == State.DEAD
    assert died == [0]


def test_hit_pipe_is_idempotent(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    died = []
    game.event_bus.subscribe(EventType.PLAYER_DIED, lambda e: died.append(e))
    pipe = state.add_one_pipe(120, 230)

    state.hit_pipe(state.plane, pipe)
    state.hit_pipe(state.plane, pipe)
    game.step(16)

    assert len(died) == 1
    assert game.flow.state == State.DEAD


def test_no_rows_spawn_after_death(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    pipe = state.add_one_pipe(120, 230)
    game.step(0)

    game.step(3000)
    assert state.score == 0
    assert len(state.pipes) == 1
    assert pipe.x == 120


def test_jump_sets_velocity_and_tweens_angle(game):
    state = game.state.current
    jumps = []
    game.event_bus.subscribe(EventType.PLAYER_JUMPED, lambda e: jumps.append(e))

    game.event_bus.emit(key_down_event("space"))
    assert state.plane.body.velocity.y == -350
    assert game.tweens.has_animation("jump")
    assert len(jumps) == 1

    game.step(100)
    assert state.plane.angle == -20
    assert not game.tweens.has_animation("jump")


def test_pointer_press_jumps(game):
    state = game.state.current
    game.event_bus.emit(pointer_down_event(10, 10))
    assert state.plane.body.velocity.y == -350


def test_other_keys_do_not_jump(game):
    state = game.state.current
    game.event_bus.emit(key_down_event("up"))
    assert state.plane.body.velocity.y == 0


def test_jump_does_nothing_when_dead(game):
    state = game.state.current
    state.hit_pipe()
    state.plane.body.velocity.y = 0

    game.event_bus.emit(key_down_event("space"))
    game.event_bus.emit(pointer_down_event(10, 10))

    assert state.plane.body.velocity.y == 0
    assert not game.tweens.has_animation("jump")


def test_angle_climbs_to_twenty_and_stops(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    assert state.plane.angle == 1

    for _ in range(40):
        game.step(0)
    assert state.plane.angle == 20


def test_motor_animation_cycles_frames(game):
    state = game.state.current
    state.plane.body.gravity.y = 0
    assert state.plane.animations.current.name == "motor"

    seen = []
    for _ in range(4):
        game.step(34)
        seen.append(state.plane.frame)
    assert seen == [1, 2, 1, 0]


def test_leaving_the_top_restarts_on_next_frame(game):
    old = game.state.current
    old.score = 3
    old.plane.y = -1
    restarts = []
    game.event_bus.subscribe(EventType.GAME_RESTART, lambda e: restarts.append(e.data))

    game.step(0)
    assert game.state.current is old
    assert game.state.pending == "Main"
    assert restarts == []

    game.step(0)
    new = game.state.current
    assert new is not old
    assert new.score == 0
    assert new.plane.alive
    assert len(new.pipes) == 0
    assert game.flow.state == State.PLAYING
    assert game.flow.context.last_score == 3
    assert restarts == [{"state": "Main", "restarts": 1}]


def test_dead_plane_falls_out_and_restarts(game):
    state = game.state.current
    state.add_one_pipe(120, 230)
    game.step(0)
    assert game.flow.state == State.DEAD

    game.step(1000)
    assert state.plane.y > 490
    assert game.state.pending == "Main"

    game.step(0)
    assert game.state.current is not state
    assert game.flow.state == State.PLAYING
    assert game.flow.context.restarts == 1


def test_restart_drops_old_bindings(game):
    old = game.state.current
    old.plane.y = 1000
    game.step(0)
    game.step(0)
    new = game.state.current

    game.event_bus.emit(key_down_event("space"))
    assert new.plane.body.velocity.y == -350
    assert old.plane.body.velocity.y != -350
    assert game.time.length == 1


def test_non_desktop_uses_show_all(tmp_path):
    game = make_game(tmp_path, desktop=False)
    game.step(0)
    assert game.scale.scale_mode == ScaleMode.SHOW_ALL
    assert (game.scale.min_width, game.scale.min_height) == (200, 245)
    assert (game.scale.max_width, game.scale.max_height) == (400, 490)
    assert game.scale.page_align_horizontally and game.scale.page_align_vertically


def test_desktop_keeps_no_scale(game):
    assert game.scale.scale_mode == ScaleMode.NO_SCALE


def test_render_draws_background(game):
    buffer = game.render()
    assert buffer.shape == (490, 400, 3)
    assert tuple(buffer[489, 399]) == (0x71, 0xC5, 0xCF)
