import os
import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter
from logging import getLogger
from pathlib import Path

from blametint import _logging
from blametint._logging import set_logging_level_from_verbosity
from blametint.annotations import format_date_short, get_line_annotations
from blametint.args_settings import CLIArgs, Settings, SettingsFile
from blametint.blame_reader import BlameCommandError, BlameReader
from blametint.blame_session import BlameSession, BlameSessions
from blametint.cli_arguments import define_arguments
from blametint.tiphelp import Help
from blametint.utils import log, read_code_lines

# Limit the width of the help text to 90 characters.
os.environ["COLUMNS"] = "90"

logger = getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    settings: Settings

    parser = ArgumentParser(
        prog="blametint",
        description=Help.help_doc,
        formatter_class=RawDescriptionHelpFormatter,
    )
    define_arguments(parser)

    argv = sys.argv[1:] if argv is None else argv

    # For zero arguments, print help and exit.
    if not argv:
        parser.print_help()
        return

    namespace = parser.parse_args(argv)
    if namespace.verbosity:
        namespace.verbosity = min(namespace.verbosity, 2)

    _logging.ini_for_cli(namespace.verbosity)

    if namespace.reset:
        settings = SettingsFile.reset()
        log(f"Settings file reset to {SettingsFile.get_location_path()}.")
    elif namespace.load is not None:
        path_str = namespace.load
        settings, error = SettingsFile.load_from(path_str)
        if error:
            logger.error(
                f"--load {path_str}: Error loading settings from {path_str}: {error}"
            )
            return
        SettingsFile.set_location(Path(path_str).resolve())
        log(f"Settings loaded from {path_str}.")
    else:
        settings = load_settings(namespace.save, namespace.save_as)

    cli_args: CLIArgs = settings.to_cli_args()
    cli_args.update_with_namespace(namespace)

    if namespace.save:
        settings = cli_args.create_settings()
        settings.save()
        log(f"Settings saved to {SettingsFile.get_location_path()}.")

    if namespace.save_as is not None:
        path_str = namespace.save_as
        if Path(path_str).suffix == ".json":
            path = Path(path_str).resolve()
            settings = cli_args.create_settings()
            settings.save_as(path)
            log(f"Settings saved to {path}.")
        else:
            logger.error(f"--save-as {path_str}: {path_str} should be a JSON file.")

    if namespace.show:
        SettingsFile.show()

    if cli_args.input_fstrs:
        blame_files(cli_args)
    elif not (
        namespace.save
        or namespace.save_as is not None
        or namespace.show
        or namespace.reset
        or namespace.load is not None
    ):
        log(
            "This command has no effect. Specify one or more files to blame, or use "
            "--save or --save-as to save settings or --show to display settings."
        )


def load_settings(save: bool, save_as: str | None) -> Settings:
    settings: Settings
    error: str
    settings, error = SettingsFile.load()
    set_logging_level_from_verbosity(settings.verbosity)
    if error:
        logger.warning("Cannot load settings file, loading default settings.")
        if not save and save_as is None:
            log("Save settings (--save) to avoid this message.")
    return settings


def blame_files(cli_args: CLIArgs) -> None:
    args = cli_args.create_args()
    reader = BlameReader(args.whitespace, args.copy_move)
    sessions = BlameSessions(reader, args.get_color_scale())
    for fstr in cli_args.input_fstrs:
        try:
            session = sessions.open(fstr)
            if session is None:
                log(f"{fstr}: no blame results")
                continue
            if cli_args.commits:
                log_commits(session, reader.get_repository_url(fstr))
            else:
                log_annotated_lines(session)
        except BlameCommandError as e:
            logger.error(f"{fstr}: {e}")
        finally:
            sessions.close(fstr)


def log_annotated_lines(session: BlameSession) -> None:
    code_lines = read_code_lines(session.fstr)
    annotations = get_line_annotations(session, len(code_lines))
    line_nr2annotation = {a.line_nr: a for a in annotations}
    color_width = max((len(a.background_color) for a in annotations), default=0)
    text_width = max((len(a.text) for a in annotations), default=0)
    for line_nr, code_line in enumerate(code_lines, start=1):
        annotation = line_nr2annotation.get(line_nr)
        if annotation is None:
            log(f"{'':{color_width}}   {'':{text_width}} {code_line}")
            continue
        # Mark the lines of the latest commit.
        marker = "*" if annotation.bold else " "
        log(
            f"{annotation.background_color:{color_width}} {marker} "
            f"{annotation.text} {code_line}"
        )


def log_commits(session: BlameSession, repo_url: str) -> None:
    records = sorted(session.records, key=lambda r: r.timestamp, reverse=True)
    for record in records:
        date = format_date_short(record.timestamp, record.tz_offset)
        color = session.color_index.color_for(record.timestamp)
        log(
            f"{color:9} {date} {record.sha} {len(record.lines):5} "
            f"{record.author}: {record.summary}"
        )
        if repo_url and not record.is_uncommitted:
            log(f"{'':9} {repo_url}/commit/{record.oid}")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        os._exit(0)
