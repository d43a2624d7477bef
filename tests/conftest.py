import cv2
import numpy as np
import pytest


@pytest.fixture
def square_img():
    # black 100x100 BGR with a white square in the middle
    img = np.zeros((100, 100, 3), np.uint8)
    cv2.rectangle(img, (30, 30), (70, 70), (255, 255, 255), cv2.FILLED)
    return img


@pytest.fixture
def gui_calls(monkeypatch):
    """Swaps the highgui calls for recorders so tests run without a display"""
    calls = {"namedWindow": [], "createTrackbar": [], "imshow": [], "waitKey": [], "destroyAllWindows": []}

    def recorder(name):
        def record(*args, **kwargs):
            calls[name].append(args)
            return -1 if name == "waitKey" else None
        return record

    for name in calls:
        monkeypatch.setattr(cv2, name, recorder(name))
    return calls
