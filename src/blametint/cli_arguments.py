from argparse import ArgumentParser, BooleanOptionalAction

from blametint.constants import COPY_MOVE_CHOICES, THEME_CHOICES
from blametint.tiphelp import Help
from blametint.utils import get_color_scale, get_version

hlp = Help()


def define_arguments(parser: ArgumentParser):
    mutex_group_titled = parser.add_argument_group("Mutually exclusive options")
    mutex_group = mutex_group_titled.add_mutually_exclusive_group()
    mutex_group.add_argument(
        "--show",
        action="store_true",
        help=hlp.show,
    )
    mutex_group.add_argument(
        "--save",
        action="store_true",
        help=hlp.save,
    )
    mutex_group.add_argument(
        "--save-as",
        type=str,
        metavar="PATH",
        help=hlp.save_as,
    )
    mutex_group.add_argument(
        "--load",
        type=str,
        metavar="PATH",
        help=hlp.load,
    )
    mutex_group.add_argument(
        "--reset",
        action="store_true",
        help=hlp.reset,
    )
    mutex_group.add_argument(
        "-V",
        "--version",
        action="version",
        version=get_version(),
        help=hlp.version,
    )

    # Input
    group_input = parser.add_argument_group("Input")
    group_input.add_argument(
        "input_fstrs",
        nargs="*",  # produce a list of paths
        metavar="PATH",
        help=hlp.input_fstrs,
    )

    # Output
    group_output = parser.add_argument_group("Output")
    group_output.add_argument(
        "--commits",
        action="store_true",
        default=None,
        help=hlp.commits,
    )
    group_output.add_argument(
        "--theme",
        choices=THEME_CHOICES,
        help=hlp.theme,
    )
    group_output.add_argument(
        "--color-scale-light",
        type=get_color_scale,
        metavar="COLORS",
        help=hlp.color_scale_light,
    )
    group_output.add_argument(
        "--color-scale-dark",
        type=get_color_scale,
        metavar="COLORS",
        help=hlp.color_scale_dark,
    )

    # Blame
    group_blame = parser.add_argument_group("Blame")
    group_blame.add_argument(
        "--whitespace",
        action=BooleanOptionalAction,
        help=hlp.whitespace,
    )
    group_blame.add_argument(
        "--copy-move",
        type=int,
        choices=COPY_MOVE_CHOICES,
        metavar="N",
        help=hlp.copy_move,
    )
    group_blame.add_argument(
        "-v",
        "--verbosity",
        action="count",
        help=hlp.verbosity,
    )
