# Blame output
UNCOMMITTED_AUTHOR = "Not Committed Yet"  # author git blame reports for new lines
UNCOMMITTED_LABEL = "Not committed"  # shown instead of UNCOMMITTED_AUTHOR
NO_COLOR = "#fff0"  # lines older than the last color of the scale
NBSP = "\u00a0"  # non-breaking space, same width as a space but not squished
THIN_SPACE = "\u2009"

# Color scales, newest commit first
LIGHT = "light"
DARK = "dark"
THEME_CHOICES = [LIGHT, DARK]
THEME_DEFAULT = DARK

DEFAULT_COLOR_SCALE_LIGHT = [
    "#f9a82580",
    "#f9a82570",
    "#f9a82560",
    "#f9a82550",
    "#f9a82544",
    "#f9a82538",
    "#f9a8252c",
    "#f9a82520",
    "#f9a82518",
    "#f9a82510",
]
DEFAULT_COLOR_SCALE_DARK = [
    "#2f81f780",
    "#2f81f770",
    "#2f81f760",
    "#2f81f750",
    "#2f81f744",
    "#2f81f738",
    "#2f81f72c",
    "#2f81f720",
    "#2f81f718",
    "#2f81f710",
]

# CLI and settings defaults
DEFAULT_COPY_MOVE = 0
COPY_MOVE_CHOICES = [0, 1, 2, 3, 4]
DEFAULT_VERBOSITY = 0

# Git
GIT_BLAME_TIMEOUT = 30  # seconds
IGNORE_REVS_FILE_NAME = ".git-blame-ignore-revs"
