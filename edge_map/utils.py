import cv2
import numpy as np


def stackImages(scale, imgArray, labels=None):
    """
    Scales and stacks images in a grid.

    :param scale: float scaling factor for all images
    :param imgArray: 1D list of images or 2D list (list of lists) of images
    :param labels: optional names laid out the same way as imgArray, drawn on each tile
    :return: single BGR image composed of the input images stacked accordingly
    """
    rows_available = isinstance(imgArray[0], list)
    grid = imgArray if rows_available else [imgArray]
    if labels is not None and not rows_available:
        labels = [labels]

    # every tile is resized to the first image before scaling
    height, width = grid[0][0].shape[:2]

    def prepare(img, label):
        if img.shape[:2] != (height, width):
            img = cv2.resize(img, (width, height), interpolation=cv2.INTER_AREA)
        # single channel 0/1 images (the normalised gray) would show up as black
        if len(img.shape) == 2 and img.dtype == np.uint8 and img.max() == 1:
            img = img * 255
        img = cv2.resize(img, (0, 0), fx=scale, fy=scale, interpolation=cv2.INTER_AREA)
        if len(img.shape) == 2:
            img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
        if label:
            cv2.putText(img, label, (10, 25), cv2.FONT_HERSHEY_COMPLEX, 0.6, (0, 255, 0), 1)
        return img

    rows = []
    for r, row in enumerate(grid):
        tiles = []
        for c, img in enumerate(row):
            label = labels[r][c] if labels is not None else None
            tiles.append(prepare(img, label))
        rows.append(tiles)

    # short rows get padded with black tiles so vstack lines up
    cols = max(len(row) for row in rows)
    blank = np.zeros_like(rows[0][0])
    hor_stacks = [np.hstack(row + [blank] * (cols - len(row))) for row in rows]
    return np.vstack(hor_stacks)
