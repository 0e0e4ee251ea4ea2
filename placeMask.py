from blendErrors import InvalidPlacement, SourceTooSmall


def validate_placement(mask_w, mask_h, target_w, target_h, mx, my):
    """Check that a mask pasted at (mx, my) keeps a one-pixel margin inside the target.

    Every interior mask pixel then has all four neighbours inside the target,
    which is what lets each matrix row carry a diagonal of exactly 4.
    """
    x_min, y_min = mx, my
    x_max, y_max = mx + mask_w, my + mask_h

    if x_min > 0 and y_min > 0 and x_max < target_w - 1 and y_max < target_h - 1:
        return

    raise InvalidPlacement(
        f"The mask (min = ({x_min}, {y_min}), max = ({x_max}, {y_max})) does not fit "
        f"in the target image (min = (1, 1), max = ({target_w - 1}, {target_h - 1})); "
        f"it may not touch the target border"
    )


def validate_source(source, mask):
    # the source is sampled at mask-local coordinates
    if source.width < mask.width or source.height < mask.height:
        raise SourceTooSmall(
            f"source image {source.width}x{source.height} is smaller than "
            f"mask {mask.width}x{mask.height}"
        )
