from dataclasses import dataclass


# The field names of class KeysArgs are identical to those of class Args, but the values
# are all strings equal to the names.
@dataclass
class KeysArgs:
    theme: str = "theme"
    color_scale_light: str = "color_scale_light"
    color_scale_dark: str = "color_scale_dark"
    whitespace: str = "whitespace"
    copy_move: str = "copy_move"
    verbosity: str = "verbosity"
