"""Design tokens for the ShiftDiff windows (single source of truth).
Window geometry, trackbar labels and annotation styling.
"""

# Window titles (the image windows are titled by their file names)
DIFFERENCE_WINDOW = "DIFFERENCE"

# Window geometry (pixels): (width, height, x offset, y offset)
REFERENCE_GEOMETRY = (500, 400, 0, 0)
COMPARE_GEOMETRY = (500, 400, 550, 0)
DIFFERENCE_GEOMETRY = (500, 400, 550, 200)

# Trackbar labels: reference region on the reference window
TB_REF_X = "r_x_TL"
TB_REF_Y = "r_y_TL"
TB_REF_W = "r_x_BR"
TB_REF_H = "r_y_BR"
# Template region on the compare window
TB_TEMPL_X = "t_x_TL"
TB_TEMPL_Y = "t_y_TL"
TB_TEMPL_W = "t_x_BR"
TB_TEMPL_H = "t_y_BR"
# Difference processing on the difference window
TB_THRESHOLD = "thrshld"
TB_ERODE_DILATE = "err/dil"
TB_MIN_AREA = "min.area"

# Annotation colours (BGR)
RECT_COLOR = (255, 0, 0)

# Line thickness
REGION_THICKNESS = 2
TEMPLATE_THICKNESS = 8

# Keys that close the tool
EXIT_KEYS = (27, ord("q"))  # Esc, q
WAIT_KEY_MS = 50
