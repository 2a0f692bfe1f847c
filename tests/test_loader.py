import logging

import numpy as np
import pytest
from PIL import Image

from planeflap.audio.engine import AudioEngine
from planeflap.engine.loader import AssetCache, AssetLoader
from planeflap.graphics.sprites import make_pipe, make_plane_frames


@pytest.fixture
def loader(tmp_path):
    return AssetLoader(tmp_path, AssetCache(), AudioEngine())


def test_image_loads_from_file(tmp_path, loader):
    Image.new("RGBA", (20, 30), (255, 0, 0, 255)).save(tmp_path / "pipe.png")
    loader.image("pipe", "pipe.png", make_pipe)

    assert loader.cache.frame_size("pipe") == (20, 30)
    frame = loader.cache.get_frames("pipe")[0]
    assert tuple(frame[0, 0]) == (255, 0, 0, 255)


def test_missing_image_uses_fallback(loader, caplog):
    with caplog.at_level(logging.WARNING):
        loader.image("pipe", "pipe.png", make_pipe)

    assert loader.cache.frame_size("pipe") == (50, 50)
    assert "Asset not found" in caplog.text


def test_unreadable_image_uses_fallback(tmp_path, loader):
    (tmp_path / "pipe.png").write_bytes(b"not an image")
    loader.image("pipe", "pipe.png", make_pipe)
    assert loader.cache.frame_size("pipe") == (50, 50)


def test_spritesheet_is_cut_into_frames(tmp_path, loader):
    Image.new("RGBA", (150, 43)).save(tmp_path / "plane_scaled.png")
    loader.spritesheet("plane", "plane_scaled.png", 50, 43, make_plane_frames)

    frames = loader.cache.get_frames("plane")
    assert len(frames) == 3
    assert loader.cache.frame_size("plane") == (50, 43)


def test_spritesheet_smaller_than_a_frame_uses_fallback(tmp_path, loader):
    Image.new("RGBA", (10, 10)).save(tmp_path / "plane_scaled.png")
    loader.spritesheet("plane", "plane_scaled.png", 50, 43, make_plane_frames)
    assert len(loader.cache.get_frames("plane")) == 3


def test_loaded_key_is_not_reloaded(loader):
    calls = []

    def fallback():
        calls.append(1)
        return make_pipe()

    loader.image("pipe", "pipe.png", fallback)
    loader.image("pipe", "pipe.png", fallback)
    assert calls == [1]


def test_unknown_key_raises():
    cache = AssetCache()
    with pytest.raises(KeyError, match="Asset not loaded: ghost"):
        cache.get_frames("ghost")


def test_empty_frame_list_is_rejected():
    cache = AssetCache()
    with pytest.raises(ValueError):
        cache.add_frames("pipe", [])


def test_sound_without_mixer_is_silent(loader):
    loader.audio_file("jump", "jump.wav")
    sound = loader.audio.add("jump", volume=0.2)

    assert not loader.audio.has_sound("jump")
    assert sound.play() is None


def test_cache_clear():
    cache = AssetCache()
    cache.add_frames("pipe", [np.zeros((2, 2, 4), dtype=np.uint8)])
    cache.clear()
    assert not cache.has("pipe")
