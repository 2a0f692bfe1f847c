"""Engine layer: physics, sprites, timers, input, assets, scaling."""
