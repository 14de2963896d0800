import json
import shlex
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from buildseq.tasks.types import Task, Variant

from .types import BuildConfig, ConfigError, UnsupportedConfigFormatError

DEFAULT_CONFIG_NAMES = ("buildseq.yml", "buildseq.yaml", "buildseq.toml", "buildseq.json")


def find_config(directory: str | Path = ".") -> Path | None:
    base = Path(directory)
    for name in DEFAULT_CONFIG_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: str | Path) -> BuildConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_config(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    # An empty YAML file means "use the defaults".
    if raw_file is None:
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: YAML parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: JSON parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_config(raw: Mapping[str, Any]) -> BuildConfig:
    keys = {"tasks", "log_file", "artifacts_dir"}
    config = BuildConfig()

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"Can't process: {field}")

    if "log_file" in raw:
        config.log_file = _non_empty_string(raw["log_file"], "log_file")

    if "artifacts_dir" in raw:
        config.artifacts_dir = _non_empty_string(raw["artifacts_dir"], "artifacts_dir")

    if "tasks" not in raw:
        return config

    if not isinstance(raw["tasks"], Mapping):
        raise ConfigError(f"'tasks' must be a mapping, got {type(raw['tasks'])}")

    known_tags = {task.tag for task in Task}

    for tag, entry in raw["tasks"].items():
        if not isinstance(tag, str):
            raise ConfigError(f"Task name must be a string, got {type(tag)}")

        tag_norm = tag.strip()

        if tag_norm not in known_tags:
            raise ConfigError(
                f"Unknown task '{tag_norm}'. Use [{'|'.join(sorted(known_tags))}]"
            )

        if tag_norm in config.commands:
            raise ConfigError(f"Duplicate task after normalization: {tag_norm}")

        config.commands[tag_norm] = _build_overrides(tag_norm, entry)

    return config


def _build_overrides(tag: str, entry: Any) -> dict[str, str]:
    variants = [variant.value for variant in Variant]

    # A plain string applies to every variant.
    if isinstance(entry, str):
        command = _command(entry, tag)
        return {variant: command for variant in variants}

    if not isinstance(entry, Mapping):
        raise ConfigError(f"{tag}: should be a command string or a mapping of variants")

    if len(entry) < 1:
        raise ConfigError(f"{tag}: at least one variant command is required")

    overrides = {}
    for variant, command in entry.items():
        if variant not in variants:
            raise ConfigError(f"{tag}: unknown variant '{variant}'. Use [{'|'.join(variants)}]")

        overrides[variant] = _command(command, f"{tag}.{variant}")

    return overrides


def _non_empty_string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{where}: should be a string")

    if len(value.strip()) < 1:
        raise ConfigError(f"{where}: can't be empty")

    return value.strip()


def _command(value: Any, where: str) -> str:
    command = _non_empty_string(value, where)
    try:
        shlex.split(command)
    except ValueError as exc:
        raise ConfigError(f"{where}: invalid command: {exc}") from exc
    return command
