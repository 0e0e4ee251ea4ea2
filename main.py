import argparse
import logging
import sys

from imageData import DEFAULT_GAMMA
from imageIO import load_image, save_output
from seamlessCloning import blend

logger = logging.getLogger("poisson_blend")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="poisson-blend",
        description="Paste a masked source image into a target image with Poisson blending.",
        epilog="NOTE: the mask may not touch the borders of the target image, "
               "i.e. you can't set something like -mx 0 -my 0.",
    )
    parser.add_argument("-target", required=True, help="target image")
    parser.add_argument("-source", required=True, help="source image")
    parser.add_argument("-output", required=True, help="output image (PNG)")
    parser.add_argument("-mask", required=True, help="mask image; red above 0.99 is blended")
    parser.add_argument("-mx", type=int, required=True, help="blending target x-position")
    parser.add_argument("-my", type=int, required=True, help="blending target y-position")
    parser.add_argument("-gamma", type=float, default=DEFAULT_GAMMA,
                        help=f"gamma used to linearize and re-encode (default {DEFAULT_GAMMA})")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.gamma <= 0:
        logger.error("gamma must be positive, got %s", args.gamma)
        return 2

    try:
        target = load_image(args.target, args.gamma)
        mask = load_image(args.mask, args.gamma)
        source = load_image(args.source, args.gamma)
    except (OSError, ValueError) as e:
        logger.error("could not open input image: %s", e)
        return 1

    result = blend(mask, source, target, args.mx, args.my, gamma=args.gamma)
    if not result.ok:
        logger.error("blend failed (%s): %s", result.failure.value, result.message)
        return 1

    try:
        save_output(args.output, result.output)
    except (OSError, ValueError) as e:
        logger.error("could not write %s: %s", args.output, e)
        return 1

    logger.info("Done. Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
