import cv2
import numpy as np
import pytest

from edge_map.tuner import EdgeMapTuner, ImageLoadError


def test_setup_creates_trackbars(square_img, gui_calls):
    tuner = EdgeMapTuner("Edge Map", square_img)
    tuner.setup()

    assert gui_calls["namedWindow"] == [("Edge Map", cv2.WINDOW_AUTOSIZE)]
    bars = [(label, window, pos, count) for label, window, pos, count, _ in gui_calls["createTrackbar"]]
    assert bars == [
        ("Min Threshold:", "Edge Map", 0, 100),
        ("Threshold Ratio:", "Edge Map", 3, 50),
        ("Aperture Size:", "Edge Map", 0, 2),
        ("Blur Size:", "Edge Map", 0, 8),
        ("Dilation Iters:", "Edge Map", 0, 10),
        ("Erosion Iters:", "Edge Map", 0, 10),
    ]


def test_update_only_redraws_on_change(square_img, gui_calls):
    tuner = EdgeMapTuner("Edge Map", square_img)

    assert tuner.update("ratio", 3) is False
    assert gui_calls["imshow"] == []

    assert tuner.update("ratio", 4) is True
    assert tuner.params.ratio == 4
    assert len(gui_calls["imshow"]) == 1
    window, img = gui_calls["imshow"][0]
    assert window == "Edge Map"
    assert img.shape == square_img.shape


def test_trackbar_callbacks_use_lookup_tables(square_img, gui_calls):
    tuner = EdgeMapTuner("Edge Map", square_img)
    tuner.setup()
    callbacks = {args[0]: args[4] for args in gui_calls["createTrackbar"]}

    callbacks["Blur Size:"](2)
    callbacks["Aperture Size:"](2)
    callbacks["Min Threshold:"](7)
    callbacks["Erosion Iters:"](0)

    assert tuner.params.blur_size == 6
    assert tuner.params.aperture_size == 7
    assert tuner.params.threshold == 7
    # erosion was already 0, no redraw for it
    assert tuner.redraws == 3


def test_load_missing_file(tmp_path):
    with pytest.raises(ImageLoadError, match="Could not open image"):
        EdgeMapTuner.load("Edge Map", tmp_path / "nope.png")


def test_load_and_empty(tmp_path, square_img):
    path = tmp_path / "square.png"
    cv2.imwrite(str(path), square_img)

    tuner = EdgeMapTuner.load("Edge Map", path)
    assert not tuner.empty()
    assert tuner.src.shape == (100, 100, 3)
    assert EdgeMapTuner("Edge Map", None).empty()


def test_run(square_img, gui_calls, capsys):
    EdgeMapTuner("Edge Map", square_img).run()

    assert "Initial processing..." in capsys.readouterr().out
    assert len(gui_calls["createTrackbar"]) == 6
    assert len(gui_calls["imshow"]) == 1
    assert gui_calls["waitKey"] == [(0,)]
    assert len(gui_calls["destroyAllWindows"]) == 1


def test_stages_window(square_img, gui_calls):
    tuner = EdgeMapTuner("Edge Map", square_img, show_stages=True, scale=0.5)
    tuner.setup()
    tuner.initial()

    shown = dict(gui_calls["imshow"])
    assert set(shown) == {"Edge Map", "Stages"}
    # 2 rows of 3 tiles at half size
    assert shown["Stages"].shape == (100, 150, 3)


def test_verbose_prints_params(square_img, gui_calls, capsys):
    tuner = EdgeMapTuner("Edge Map", square_img, verbose=True)
    tuner.update("dilation_iter", 2)
    out = capsys.readouterr().out
    assert "Redraw 1" in out
    assert "dilation_iter=2" in out


def test_stages_window_tiles(square_img, gui_calls):
    tuner = EdgeMapTuner("Edge Map", square_img, show_stages=True, scale=1)
    tuner.setup()
    tuner.initial()

    grid = dict(gui_calls["imshow"])["Stages"]
    stages = {}
    tuner.render(stages)
    # top right tile holds the raw canny output, bottom left the cleaned edges
    canny_tile = grid[40:100, 200:300, 0]
    cleaned_tile = grid[140:200, 0:100, 0]
    assert np.array_equal(canny_tile, stages["canny"][40:, :])
    assert np.array_equal(cleaned_tile, stages["cleaned"][40:, :])


def test_empty_tuner_refuses_to_run(gui_calls):
    tuner = EdgeMapTuner("Edge Map", None)
    with pytest.raises(ImageLoadError):
        tuner.run()
    with pytest.raises(ImageLoadError):
        tuner.redraw()
    assert gui_calls["namedWindow"] == []
    assert gui_calls["imshow"] == []
