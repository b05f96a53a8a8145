"""Pixel constants for the epic dependency diagram."""

BOX_WIDTH = 200
MIN_BOX_HEIGHT = 80
VERTICAL_GAP = 80
HORIZONTAL_GAP = 40
DIAGRAM_PADDING = 60

SUMMARY_FONT_SIZE = 14
SUMMARY_LINE_HEIGHT = 16
SUMMARY_PADDING = 16
CHAR_WIDTH_RATIO = 0.6  # approximate glyph width relative to font size

# Key/type header (70px) plus the assignee row (36px)
BOX_BASE_HEIGHT = 70 + 36

FRAME_INNER_PADDING = 24
FRAME_GAP = 30  # between neighbouring frame borders
FRAME_BORDER_BUFFER = 10  # each side, room for the border stroke
UNFRAMED_GAP = 120  # between the tallest frame and the unframed row

Y_OFFSET = 10
