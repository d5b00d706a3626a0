from signature_engine.utils.geometry import DocumentRect, NormalizedRect, PageGeometry


def to_document_rect(rect: NormalizedRect, page: PageGeometry) -> DocumentRect:
    """Convert a normalized (top-left origin) rectangle to PDF points.

    The browser measures y from the top edge down to the box's top-left
    corner; PDF measures y from the bottom edge up and drawing anchors a box
    at its bottom-left corner. Both the axis flip and the anchor correction
    happen in one step: ``page_height - y_from_top - box_height``.

    Values outside [0, 1] are not clamped and produce off-page coordinates.
    """
    width_pt = rect.width * page.width_pt
    height_pt = rect.height * page.height_pt
    x_pt = rect.x * page.width_pt

    y_from_top_pt = rect.y * page.height_pt
    y_pt = page.height_pt - y_from_top_pt - height_pt

    return DocumentRect(
        x_pt=x_pt,
        y_pt=y_pt,
        width_pt=width_pt,
        height_pt=height_pt,
    )
