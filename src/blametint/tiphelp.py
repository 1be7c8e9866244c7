import textwrap
from dataclasses import dataclass

from blametint.constants import (
    DEFAULT_COLOR_SCALE_DARK,
    DEFAULT_COLOR_SCALE_LIGHT,
    THEME_DEFAULT,
)


@dataclass
class Help:
    help_doc: str = textwrap.dedent(
        """
        Show git blame for files, each line annotated with date and author and
        tinted by the age of the commit that last changed it. The most recent
        commit gets the first color of the color scale, the next most recent the
        second color, and so on. Lines older than the scale are not colored.
        """
    )

    # Settings
    show: str = "Show settings file location and values"
    save: str = "Save settings file"
    save_as: str = "Save settings file to PATH, which must be a JSON file"
    load: str = "Load settings file from PATH and use it as the settings file"
    reset: str = "Reset settings file to the default values"
    version: str = "Show program's version number and exit"

    # Input
    input_fstrs: str = "Path(s) of the file(s) to blame"

    # Output
    commits: str = (
        "List the commits that last changed the lines of each file, newest first, "
        "instead of the annotated file"
    )
    theme: str = f"Color scale to use (default {THEME_DEFAULT})"
    color_scale_light: str = (
        "Comma separated colors of the light color scale, newest first "
        f"(default {','.join(DEFAULT_COLOR_SCALE_LIGHT[:2])},...)"
    )
    color_scale_dark: str = (
        "Comma separated colors of the dark color scale, newest first "
        f"(default {','.join(DEFAULT_COLOR_SCALE_DARK[:2])},...)"
    )

    # Blame options
    whitespace: str = (
        "Take whitespace changes into account in blame (default), "
        "--no-whitespace passes -w to git blame"
    )
    copy_move: str = (
        "0: Ignore copy and move of lines (default), "
        "1: Detect copy move within file, "
        "2: and across files in one commit, "
        "3: and across two commits, "
        "4: across all commits"
    )
    verbosity: str = "More debug output, -v: info, -vv: debug"
