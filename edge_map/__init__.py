from edge_map.params import EdgeParams
from edge_map.pipeline import make_edge_map, prepare_gray, smooth_contours
from edge_map.tuner import EdgeMapTuner, ImageLoadError
