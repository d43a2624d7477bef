import cv2

WINDOW_NAME = "Edge Map"
STAGES_WINDOW_NAME = "Stages"

# Canny only accepts odd apertures between 3 and 7
APERTURE_SIZE_VALUES = (3, 5, 7)
# box blur, so even sizes are fine here
BLUR_SIZE_VALUES = (1, 3, 6, 8, 10, 13, 15, 18, 25)

MAX_THRESHOLD = 100
MAX_RATIO = 50
MAX_DILATION_ITER = 10
MAX_EROSION_ITER = 10

# user controlled dilate/erode
MORPH_SHAPE = cv2.MORPH_CROSS
MORPH_SIZE = (5, 5)

# fixed cleanup applied after the user controlled morphology
CLEANUP_SHAPE = cv2.MORPH_RECT
CLEANUP_SIZE = (4, 4)
CLEANUP_DILATE_ITER = 5
MEDIAN_SIZE = 5

# (label, field, max position, lookup table or None for identity)
TRACKBARS = [
    ("Min Threshold:", "threshold", MAX_THRESHOLD, None),
    ("Threshold Ratio:", "ratio", MAX_RATIO, None),
    ("Aperture Size:", "aperture_size", len(APERTURE_SIZE_VALUES) - 1, APERTURE_SIZE_VALUES),
    ("Blur Size:", "blur_size", len(BLUR_SIZE_VALUES) - 1, BLUR_SIZE_VALUES),
    ("Dilation Iters:", "dilation_iter", MAX_DILATION_ITER, None),
    ("Erosion Iters:", "erosion_iter", MAX_EROSION_ITER, None),
]


class EdgeParams:
    """The six values the trackbars control"""
    FIELDS = ("threshold", "ratio", "aperture_size", "blur_size", "dilation_iter", "erosion_iter")

    def __init__(self, threshold=0, ratio=3, aperture_size=3, blur_size=1, dilation_iter=0, erosion_iter=0):
        self.threshold = threshold
        self.ratio = ratio
        self.aperture_size = aperture_size
        self.blur_size = blur_size
        self.dilation_iter = dilation_iter
        self.erosion_iter = erosion_iter

    def as_dict(self):
        return {field: getattr(self, field) for field in self.FIELDS}

    def __eq__(self, other):
        if not isinstance(other, EdgeParams):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        values = ", ".join(f"{k}={v}" for k, v in self.as_dict().items())
        return f"EdgeParams({values})"


def _trackbar(field):
    for trackbar in TRACKBARS:
        if trackbar[1] == field:
            return trackbar
    raise ValueError(f"Unknown parameter: {field}")


def position_to_value(field: str, pos: int) -> int:
    """
    Maps a trackbar position to the parameter value it stands for.

    :param field: name of an EdgeParams field
    :param pos: trackbar position, 0..max
    :return: the parameter value
    """
    _, _, max_pos, table = _trackbar(field)
    if not 0 <= pos <= max_pos:
        raise ValueError(f"Position {pos} out of range for {field} (0..{max_pos})")
    return table[pos] if table is not None else pos


def value_to_position(field: str, value: int) -> int:
    # inverse of position_to_value, used to place the sliders at startup
    _, _, max_pos, table = _trackbar(field)
    if table is not None:
        if value not in table:
            raise ValueError(f"{value} is not a valid {field}, expected one of {table}")
        return table.index(value)
    if not 0 <= value <= max_pos:
        raise ValueError(f"{value} out of range for {field} (0..{max_pos})")
    return value
