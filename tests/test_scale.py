import pytest

from planeflap.engine.scale import ScaleManager, ScaleMode, is_desktop


def show_all():
    manager = ScaleManager(400, 490)
    manager.scale_mode = ScaleMode.SHOW_ALL
    manager.set_min_max(200, 245, 400, 490)
    manager.page_align_horizontally = True
    manager.page_align_vertically = True
    return manager


def test_is_desktop():
    assert is_desktop("linux")
    assert is_desktop("darwin")
    assert is_desktop("win32")
    assert not is_desktop("emscripten")
    assert not is_desktop("android")


def test_no_scale_draws_one_to_one():
    manager = ScaleManager(400, 490)
    result = manager.compute(800, 600)
    assert result.scale == 1.0
    assert (result.offset_x, result.offset_y) == (0, 0)


def test_page_alignment_centres():
    manager = ScaleManager(400, 490)
    manager.page_align_horizontally = True
    manager.page_align_vertically = True
    result = manager.compute(800, 600)
    assert (result.offset_x, result.offset_y) == (200, 55)


def test_show_all_fits_window():
    result = show_all().compute(300, 245)
    assert result.scale == pytest.approx(0.5)
    assert (result.width, result.height) == (200, 245)
    assert (result.offset_x, result.offset_y) == (50, 0)


def test_show_all_never_exceeds_max():
    result = show_all().compute(1600, 1960)
    assert result.scale == 1.0
    assert (result.offset_x, result.offset_y) == (600, 735)


def test_show_all_never_goes_below_min():
    result = show_all().compute(100, 100)
    assert result.scale == pytest.approx(0.5)
    assert (result.width, result.height) == (200, 245)


def test_to_game_undoes_scale_and_offset():
    manager = show_all()
    result = manager.compute(300, 245)
    assert manager.to_game(result, 50, 0) == (0, 0)
    assert manager.to_game(result, 150, 100) == pytest.approx((200, 200))
