from planeflap.core.state import State, StateMachine


def test_starts_loading():
    machine = StateMachine()
    assert machine.state == State.LOADING
    assert machine.context.restarts == 0


def test_play_die_restart_cycle():
    machine = StateMachine()
    seen = []
    machine.add_listener(lambda old, new, ctx: seen.append((old, new)))

    assert machine.transition(State.PLAYING)
    assert machine.transition(State.DEAD, last_score=5)
    assert machine.transition(State.LOADING)

    assert machine.context.last_score == 5
    assert seen == [
        (State.LOADING, State.PLAYING),
        (State.PLAYING, State.DEAD),
        (State.DEAD, State.LOADING),
    ]


def test_invalid_transition_is_refused():
    machine = StateMachine()
    assert not machine.transition(State.DEAD)
    assert machine.state == State.LOADING


def test_unknown_context_keys_are_ignored():
    machine = StateMachine()
    machine.transition(State.PLAYING, nonsense=1)
    assert not hasattr(machine.context, "nonsense")


def test_listener_errors_do_not_block_transition():
    machine = StateMachine()

    def broken(old, new, ctx):
        raise RuntimeError("listener failed")

    machine.add_listener(broken)
    assert machine.transition(State.PLAYING)
    assert machine.state == State.PLAYING

    machine.remove_listener(broken)
    assert machine.transition(State.DEAD)
