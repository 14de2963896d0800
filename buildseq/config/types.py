from dataclasses import dataclass, field

DEFAULT_LOG_FILE = ".buildseq.log"
DEFAULT_ARTIFACTS_DIR = "app/build/outputs/apk"


@dataclass
class BuildConfig:
    # task tag -> variant name -> command
    commands: dict[str, dict[str, str]] = field(default_factory=dict)
    log_file: str = DEFAULT_LOG_FILE
    artifacts_dir: str = DEFAULT_ARTIFACTS_DIR

    def has_override(self, tag: str, variant: str) -> bool:
        return variant in self.commands.get(tag, {})

    def get_override(self, tag: str, variant: str) -> str:
        if not self.has_override(tag, variant):
            raise KeyError((tag, variant))

        return self.commands[tag][variant]


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
