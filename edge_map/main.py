import argparse
import sys

from edge_map.params import WINDOW_NAME
from edge_map.tuner import EdgeMapTuner, ImageLoadError


class _Parser(argparse.ArgumentParser):
    # wrong usage exits with 1, same as a failed image load exits with 2
    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(1)


def parse_args(argv=None):
    parser = _Parser(prog="edge-map", description="Tune the edge map pipeline on a single image")
    parser.add_argument("image", help="image filename")
    parser.add_argument("--window-name", default=WINDOW_NAME, help="title of the edge map window")
    parser.add_argument("--stack", action="store_true", help="also show the intermediate stages in a grid")
    parser.add_argument("--scale", type=float, default=0.5, help="scale of the stages grid")
    parser.add_argument("--verbose", action="store_true", help="print the parameters after every redraw")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        tuner = EdgeMapTuner.load(args.window_name, args.image,
                                  show_stages=args.stack, scale=args.scale, verbose=args.verbose)
    except ImageLoadError as e:
        print(e, file=sys.stderr)
        sys.exit(2)

    tuner.run()


if __name__ == "__main__":
    main()
