import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field, fields
from os import PathLike
from pathlib import Path
from typing import Any

import jsonschema
import platformdirs

from blametint._logging import set_logging_level_from_verbosity
from blametint.constants import (
    COPY_MOVE_CHOICES,
    DEFAULT_COLOR_SCALE_DARK,
    DEFAULT_COLOR_SCALE_LIGHT,
    DEFAULT_COPY_MOVE,
    DEFAULT_VERBOSITY,
    LIGHT,
    THEME_CHOICES,
    THEME_DEFAULT,
)
from blametint.keys import KeysArgs
from blametint.typedefs import ColorToken
from blametint.utils import log

logger = logging.getLogger(__name__)


@dataclass
class Args:
    theme: str = THEME_DEFAULT
    color_scale_light: list[str] = field(
        default_factory=lambda: list(DEFAULT_COLOR_SCALE_LIGHT)
    )
    color_scale_dark: list[str] = field(
        default_factory=lambda: list(DEFAULT_COLOR_SCALE_DARK)
    )
    whitespace: bool = True
    copy_move: int = DEFAULT_COPY_MOVE
    verbosity: int = DEFAULT_VERBOSITY

    def __post_init__(self):
        fld_names_args = {fld.name for fld in fields(Args)}
        fld_names_keys = {fld.name for fld in fields(KeysArgs)}
        assert fld_names_args == fld_names_keys, (
            f"Args - KeysArgs: {fld_names_args - fld_names_keys}\n"
            f"KeysArgs - Args: {fld_names_keys - fld_names_args}"
        )

    def get_color_scale(self) -> list[ColorToken]:
        return self.color_scale_light if self.theme == LIGHT else self.color_scale_dark


@dataclass
class Settings(Args):
    # Do not use a constant variable for default settings, because it is a mutable
    # object. For each new settings, a new object should be created.

    def create_settings_file(self, settings_path: Path):
        settings_dict = asdict(self)
        with open(settings_path, "w", encoding="utf-8") as f:
            d = json.dumps(settings_dict, indent=4, sort_keys=True)
            f.write(d)

    def save(self):
        settings_dict = asdict(self)
        jsonschema.validate(settings_dict, SettingsFile.SETTINGS_SCHEMA)
        try:
            settings_path = SettingsFile.get_location()
        except (
            FileNotFoundError,
            json.decoder.JSONDecodeError,
            jsonschema.ValidationError,
        ):
            settings_path = SettingsFile.create_location_file_for(
                SettingsFile.DEFAULT_LOCATION_SETTINGS
            )
        self.create_settings_file(settings_path)

    def save_as(self, pathlike: PathLike | str):
        settings_file_path = Path(pathlike)
        settings_dict = asdict(self)
        jsonschema.validate(settings_dict, SettingsFile.SETTINGS_SCHEMA)
        self.create_settings_file(settings_file_path)
        SettingsFile.set_location(settings_file_path)

    def to_cli_args(self) -> "CLIArgs":
        args = CLIArgs()
        vars_args = vars(args)
        settings_dict = asdict(self)
        for key in settings_dict:
            if key in vars_args:
                setattr(args, key, settings_dict[key])
        return args

    def log(self):
        settings_dict = asdict(self)
        for key, value in settings_dict.items():
            key = key.replace("_", "-")
            log(f"{key:18}: {value}")


@dataclass
class CLIArgs(Args):
    input_fstrs: list[str] = field(default_factory=list)
    commits: bool = False
    show: bool = False
    save: bool = False
    save_as: str = ""
    load: str = ""
    reset: bool = False

    def create_settings(self) -> Settings:
        settings = Settings()
        args_dict = asdict(self)
        for fld in fields(Args):
            setattr(settings, fld.name, args_dict[fld.name])
        logger.info(f"Settings from CLIArgs: {settings}")
        return settings

    def create_args(self) -> Args:
        args = Args()
        cli_args_dict = asdict(self)
        for fld in fields(Args):
            setattr(args, fld.name, cli_args_dict[fld.name])
        return args

    def update_with_namespace(self, namespace: Namespace):
        nmsp_dict: dict = vars(namespace)
        for key in nmsp_dict:
            assert key in vars(self), f"Namespace var {key} not in CLIArgs"
            if nmsp_dict[key] is not None:
                setattr(self, key, nmsp_dict[key])
        set_logging_level_from_verbosity(self.verbosity)
        logger.debug(f"CLI args: {self}")


class SettingsFile:
    SETTINGS_FILE_NAME = "blametint.json"
    SETTINGS_LOCATION_FILE_NAME: str = "blametint-location.json"

    SETTINGS_DIR = platformdirs.user_config_dir("blametint", ensure_exists=True)
    SETTINGS_LOCATION_PATH = Path(SETTINGS_DIR) / SETTINGS_LOCATION_FILE_NAME
    INITIAL_SETTINGS_PATH = Path(SETTINGS_DIR) / SETTINGS_FILE_NAME

    SETTINGS_LOCATION_SCHEMA: dict = {
        "type": "object",
        "properties": {
            "settings_location": {"type": "string"},
        },
        "additionalProperties": False,
        "minProperties": 1,
    }
    DEFAULT_LOCATION_SETTINGS: dict[str, str] = {
        "settings_location": INITIAL_SETTINGS_PATH.as_posix(),
    }

    SETTINGS_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {
            "theme": {"type": "string", "enum": THEME_CHOICES},
            "color_scale_light": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
            },
            "color_scale_dark": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
            },
            "whitespace": {"type": "boolean"},
            "copy_move": {"type": "integer", "enum": COPY_MOVE_CHOICES},
            "verbosity": {"type": "integer", "minimum": 0, "maximum": 2},
        },
        "additionalProperties": False,
        "minProperties": 6,
    }

    # Create file that contains the location of the settings file and return this
    # settings file location.
    @classmethod
    def create_location_file_for(cls, location_settings: dict[str, str]) -> Path:
        jsonschema.validate(location_settings, cls.SETTINGS_LOCATION_SCHEMA)
        d = json.dumps(location_settings, indent=4)
        with open(cls.SETTINGS_LOCATION_PATH, "w", encoding="utf-8") as f:
            f.write(d)
        return Path(location_settings["settings_location"])

    @classmethod
    def get_location(cls) -> Path:
        try:
            with open(cls.SETTINGS_LOCATION_PATH, "r", encoding="utf-8") as f:
                s = f.read()
            settings_location_dict = json.loads(s)
            jsonschema.validate(settings_location_dict, cls.SETTINGS_LOCATION_SCHEMA)
            return Path(settings_location_dict["settings_location"])
        except (
            FileNotFoundError,
            json.decoder.JSONDecodeError,
            jsonschema.ValidationError,
        ):
            cls.create_location_file_for(cls.DEFAULT_LOCATION_SETTINGS)
            return cls.get_location()

    @classmethod
    def get_location_path(cls) -> str:
        return cls.get_location().as_posix()

    @classmethod
    def show(cls):
        path = cls.get_location()
        log(f"Settings file location: {path}")
        settings, _ = cls.load()
        settings.log()

    @classmethod
    def load(cls) -> tuple[Settings, str]:
        return cls.load_from(cls.get_location())

    @classmethod
    def load_from(cls, file: PathLike | str) -> tuple[Settings, str]:
        try:
            path = Path(file)
            if path.suffix != ".json":
                raise ValueError(f"File {str(path)} does not have a .json extension")
            with open(file, "r", encoding="utf-8") as f:
                s = f.read()
                settings_dict = json.loads(s)
                jsonschema.validate(settings_dict, cls.SETTINGS_SCHEMA)
                settings = Settings(**settings_dict)
                return settings, ""
        except (
            ValueError,
            FileNotFoundError,
            json.decoder.JSONDecodeError,
            jsonschema.ValidationError,
        ) as e:
            return Settings(), str(e)

    @classmethod
    def reset(cls) -> Settings:
        cls.create_location_file_for(cls.DEFAULT_LOCATION_SETTINGS)
        settings = Settings()
        settings.save()
        return settings

    @classmethod
    def set_location(cls, location: PathLike | str):
        # Creating a new file or overwriting the existing file is both done using the
        # same "with open( ..., "w") as f" statement.
        cls.create_location_file_for({"settings_location": str(location)})
