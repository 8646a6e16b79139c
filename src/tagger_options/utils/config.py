import os
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, TextIO, Union
from pydantic import ValidationError

from ..options.binary_format import read_binary, write_binary
from ..options.errors import TextFormatError
from ..options.tagger_options import ENUM_FIELDS, FIELD_ORDER, TaggerOptions
from ..options.text_format import COERCERS, despace, format_text, parse_text

logger = logging.getLogger(__name__)

ENV_PREFIX = "TAGGER_"
FORMATS = ("text", "binary", "yaml")


class ConfigError(Exception):
    """Configuration related errors"""
    pass


def detect_format(path: Union[str, Path], fmt: Optional[str] = None) -> str:
    """Pick the file format from `fmt` or else from the file suffix"""
    if fmt is not None:
        if fmt not in FORMATS:
            raise ConfigError(f"Unknown options format: {fmt}")
        return fmt

    suffix = Path(path).suffix.lower()
    if suffix in (".yaml", ".yml"):
        return "yaml"
    if suffix == ".bin":
        return "binary"
    return "text"


def apply_env_overrides(
    options: TaggerOptions, environ: Optional[Mapping[str, str]] = None
) -> TaggerOptions:
    """Apply TAGGER_<FIELD> environment variables on top of `options`.

    Each value is read with the text-format reader of its own field, so a
    variable can only ever set that field.
    """
    if environ is None:
        environ = os.environ

    overrides: Dict[str, Any] = {}
    for env_key, env_value in environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue

        name = env_key[len(ENV_PREFIX) :].lower()
        if name not in FIELD_ORDER:
            logger.warning(f"Ignoring unknown option override {env_key}")
            continue

        try:
            overrides[name] = COERCERS[name](despace(env_value))
        except TextFormatError as e:
            raise ConfigError(f"Invalid value for {env_key}: {e.reason}: {e.detail}")

        logger.info(f"Option {name} overridden from environment")

    if not overrides:
        return options
    return TaggerOptions.assemble(overrides, base=options)


def _from_yaml_value(name: str, value: Any) -> Any:
    enum_cls = ENUM_FIELDS.get(name)
    if enum_cls is not None and isinstance(value, str):
        try:
            return enum_cls[value]
        except KeyError:
            raise ConfigError(f"Invalid value for {name}: {value}")
    return value


def load_yaml(config_path: Union[str, Path]) -> TaggerOptions:
    """Load options from a YAML mapping of field names to values"""
    config_path = Path(config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML format: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error reading config file: {e}")

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigError("YAML options must be a mapping")

    values = {}
    for key, value in config_data.items():
        if key not in FIELD_ORDER:
            logger.warning(f"Ignoring unknown option '{key}' in {config_path}")
            continue
        values[key] = _from_yaml_value(key, value)

    try:
        return TaggerOptions(**values)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}")


def save_yaml(options: TaggerOptions, config_path: Union[str, Path]) -> None:
    """Save options to a YAML file"""
    config_path = Path(config_path)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                options.to_dict(),
                f,
                default_flow_style=False,
                indent=2,
                sort_keys=False,
            )
    except OSError as e:
        raise ConfigError(f"Error saving config file: {e}")


def load_options(
    config_path: Union[str, Path],
    fmt: Optional[str] = None,
    reverse_bytes: bool = False,
    msg_out: Optional[TextIO] = None,
    apply_env: bool = True,
) -> TaggerOptions:
    """Load options from a text, binary or YAML file.

    Text format errors propagate with the file name attached; binary errors
    propagate unchanged. Environment overrides are applied last unless
    `apply_env` is False.
    """
    config_path = Path(config_path)
    fmt = detect_format(config_path, fmt)

    if not config_path.exists():
        raise ConfigError(f"Options file not found: {config_path}")

    if fmt == "yaml":
        options = load_yaml(config_path)
    elif fmt == "binary":
        try:
            with open(config_path, "rb") as f:
                options = read_binary(
                    f, msg_out=msg_out, reverse_bytes=reverse_bytes
                )
        except OSError as e:
            raise ConfigError(f"Error reading options file: {e}")
    else:
        # Undecodable bytes are kept as surrogates; they only matter on
        # lines that name an option.
        try:
            with open(
                config_path, "r", encoding="utf-8", errors="surrogateescape"
            ) as f:
                options, line_count = parse_text(f)
        except TextFormatError as e:
            e.with_source(str(config_path))
            raise
        except OSError as e:
            raise ConfigError(f"Error reading options file: {e}")
        logger.debug(f"Read {line_count} lines from {config_path}")

    logger.info(f"Loaded {fmt} options from {config_path}")

    if apply_env:
        options = apply_env_overrides(options)
    return options


def save_options(
    options: TaggerOptions,
    config_path: Union[str, Path],
    fmt: Optional[str] = None,
) -> None:
    """Write options in the format chosen by `fmt` or the file suffix"""
    config_path = Path(config_path)
    fmt = detect_format(config_path, fmt)

    if fmt == "yaml":
        save_yaml(options, config_path)
        return

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "binary":
            with open(config_path, "wb") as f:
                write_binary(options, f)
        else:
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(format_text(options))
    except OSError as e:
        raise ConfigError(f"Error saving options file: {e}")

    logger.info(f"Saved {fmt} options to {config_path}")
