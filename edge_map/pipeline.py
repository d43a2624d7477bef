import cv2
import numpy as np

from edge_map import params as P

"""
Order matters - blur before Canny, user dilate/erode next, then the fixed
cleanup. The contours of the cleaned up edges are swapped for their convex
hulls and filled, which is what ends up white in the edge map.
"""

# kernels never change, build them once
morph_kernel = cv2.getStructuringElement(P.MORPH_SHAPE, P.MORPH_SIZE)
cleanup_kernel = cv2.getStructuringElement(P.CLEANUP_SHAPE, P.CLEANUP_SIZE)


def prepare_gray(src):
    """
    Converts a BGR image to grayscale and squeezes it into [0, 1].

    :param src: BGR uint8 image
    :return: single channel uint8 image holding only 0s and 1s
    """
    imgGray = cv2.cvtColor(src, cv2.COLOR_BGR2GRAY)
    return cv2.normalize(imgGray, None, 0, 1, cv2.NORM_MINMAX)


def canny_edges(gray, params):
    imgBlur = cv2.blur(gray, (params.blur_size, params.blur_size))
    return cv2.Canny(imgBlur, params.threshold, params.threshold * params.ratio,
                     apertureSize=params.aperture_size)


def clean_edges(edges, params):
    # user morphology first, then the fixed cleanup
    if params.dilation_iter > 0:
        edges = cv2.dilate(edges, morph_kernel, iterations=params.dilation_iter)
    if params.erosion_iter > 0:
        edges = cv2.erode(edges, morph_kernel, iterations=params.erosion_iter)

    edges = cv2.dilate(edges, cleanup_kernel, iterations=P.CLEANUP_DILATE_ITER)
    return cv2.medianBlur(edges, P.MEDIAN_SIZE)


def detect_edges(gray, params):
    return clean_edges(canny_edges(gray, params), params)


def smooth_contours(edges):
    """
    Replaces every external contour with its convex hull and fills it.

    :param edges: binary single channel image
    :return: mask of the same size, 255 inside the hulls and 0 elsewhere
    """
    contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    hulls = [cv2.convexHull(cnt) for cnt in contours]

    mask = np.zeros(edges.shape[:2], np.uint8)
    cv2.drawContours(mask, hulls, -1, 255, cv2.FILLED)
    return mask


def composite(src, mask):
    # white wherever the mask is set, black everywhere else, same shape as src
    dst = np.zeros_like(src)
    dst[mask > 0] = 255
    return dst


def make_edge_map(src, gray, params, stages=None):
    """
    Runs the whole pipeline on one image.

    :param src: BGR image, only its shape and type are used for the output
    :param gray: output of prepare_gray(src)
    :param params: EdgeParams
    :param stages: optional dict, filled with the intermediate images by name
    :return: edge map, white on black, same shape and type as src
    """
    imgCanny = canny_edges(gray, params)
    edges = clean_edges(imgCanny, params)
    mask = smooth_contours(edges)
    dst = composite(src, mask)

    if stages is not None:
        stages["canny"] = imgCanny
        stages["cleaned"] = edges
        stages["mask"] = mask
        stages["edge map"] = dst
    return dst
