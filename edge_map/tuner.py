import cv2

from edge_map import params as P
from edge_map import utils
from edge_map.pipeline import make_edge_map, prepare_gray


class ImageLoadError(Exception):
    pass


class EdgeMapTuner:
    """Window with one trackbar per parameter, re-renders the edge map on every change"""

    def __init__(self, window_name, src, show_stages=False, scale=0.5, verbose=False):
        self.window_name = window_name
        self.src = src
        self.gray = None if self.empty() else prepare_gray(src)
        self.params = P.EdgeParams()
        self.show_stages = show_stages
        self.scale = scale
        self.verbose = verbose
        self.redraws = 0

    @classmethod
    def load(cls, window_name, path, **kwargs):
        src = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if src is None:
            raise ImageLoadError(f"Could not open image {path}")
        return cls(window_name, src, **kwargs)

    def empty(self) -> bool:
        return self.src is None or self.src.size == 0

    def setup(self):
        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
        for label, field, max_pos, _ in P.TRACKBARS:
            pos = P.value_to_position(field, getattr(self.params, field))
            cv2.createTrackbar(label, self.window_name, pos, max_pos, self.on_trackbar(field))
        if self.show_stages:
            cv2.namedWindow(P.STAGES_WINDOW_NAME, cv2.WINDOW_AUTOSIZE)

    def on_trackbar(self, field):
        def callback(pos):
            self.update(field, P.position_to_value(field, pos))
        return callback

    def update(self, field, value) -> bool:
        # only redraw when the slider actually landed on a new value
        if getattr(self.params, field) == value:
            return False
        setattr(self.params, field, value)
        self.redraw()
        return True

    def render(self, stages=None):
        if self.empty():
            raise ImageLoadError("No image to process")
        return make_edge_map(self.src, self.gray, self.params, stages)

    def redraw(self):
        stages = {} if self.show_stages else None
        cv2.imshow(self.window_name, self.render(stages))
        self.redraws += 1

        if stages is not None:
            imgStack = utils.stackImages(self.scale,
                                         [[self.src, self.gray, stages["canny"]],
                                          [stages["cleaned"], stages["mask"], stages["edge map"]]],
                                         [["Source", "Gray", "Canny"], ["Cleaned", "Mask", "Edge Map"]])
            cv2.imshow(P.STAGES_WINDOW_NAME, imgStack)
        if self.verbose:
            print(f"Redraw {self.redraws}: {self.params}")

    def initial(self):
        self.redraw()

    def run(self):
        if self.empty():
            raise ImageLoadError("No image to process")
        self.setup()
        print("Initial processing...")
        self.initial()
        # use 0 for infinite wait, any key closes the demo
        cv2.waitKey(0)
        cv2.destroyAllWindows()
