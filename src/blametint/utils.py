import argparse
from pathlib import Path
from typing import Any


def log(arg: Any, end: str = "\n", flush: bool = False):
    print(arg, end=end, flush=flush)


def get_version() -> str:
    my_dir = Path(__file__).resolve().parent
    version_file = my_dir / "version.txt"
    with open(version_file, "r", encoding="utf-8") as file:
        version = file.read().strip()
    return version


def str_split_comma(s: str) -> list[str]:
    return [part.strip() for part in s.split(",") if part.strip()]


def get_color_scale(arg: str) -> list[str]:
    colors = str_split_comma(arg)
    if not colors:
        raise argparse.ArgumentTypeError(
            f"Invalid value '{arg}', use a comma separated list of colors."
        )
    return colors


def read_code_lines(fstr: str) -> list[str]:
    # Same line split as git: only on "\n", no empty line after a final newline.
    with open(fstr, "r", encoding="utf-8", errors="replace", newline="") as f:
        text = f.read()
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]
