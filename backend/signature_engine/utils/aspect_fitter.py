from signature_engine.utils.geometry import DocumentRect, DrawnRect, ImageIntrinsics


def fit(image: ImageIntrinsics, box: DocumentRect) -> DrawnRect:
    """Contain-fit an image inside ``box`` and center it.

    The image is scaled uniformly by the tighter of the two axes, so it never
    exceeds the box and never stretches. A zero-width or zero-height box gives
    a zero-area rectangle at the box corner.
    """
    scale = min(
        box.width_pt / image.width_px,
        box.height_pt / image.height_px,
    )

    draw_width = image.width_px * scale
    draw_height = image.height_px * scale

    # Center inside the box
    draw_x = box.x_pt + (box.width_pt - draw_width) / 2
    draw_y = box.y_pt + (box.height_pt - draw_height) / 2

    return DrawnRect(
        x_pt=draw_x,
        y_pt=draw_y,
        width_pt=draw_width,
        height_pt=draw_height,
    )
