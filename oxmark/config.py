"""
Configuration for oxmark.

Settings live in a plain `key=value` file (default ~/.config/oxmark/config).
Environment variables take precedence over the file:

    OXMARK_CONFIG   alternate config file location
    OXMARK_DB       database path
    OXMARK_LOG      log file path
    EDITOR          editor used by `oxmark command` for file bookmarks
"""
import os
from dataclasses import dataclass

DATA_DIR = os.path.expanduser("~/.local/share/oxmark")
CONFIG_PATH = os.path.expanduser("~/.config/oxmark/config")

DEFAULT_EDITOR = "vi"

TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class Config:
    database: str = os.path.join(DATA_DIR, "oxmark.db")
    log_file: str = os.path.join(DATA_DIR, "oxmark.log")
    editor: str = DEFAULT_EDITOR
    show_hidden: bool = False


def read_config_file(path: str) -> dict:
    """
    Parse `path` into a dict of raw string values.
    Blank lines and lines starting with '#' are skipped; a missing file is an empty config.
    """
    values = {}
    if not os.path.isfile(path):
        return values
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip().lower()] = value.strip()
    return values


def load_config(environ=None) -> Config:
    """Build the effective Config from the config file and the environment."""
    env = os.environ if environ is None else environ
    config = Config()

    values = read_config_file(env.get("OXMARK_CONFIG", CONFIG_PATH))
    if values.get("database"):
        config.database = os.path.expanduser(values["database"])
    if values.get("log_file"):
        config.log_file = os.path.expanduser(values["log_file"])
    if values.get("editor"):
        config.editor = values["editor"]
    if "show_hidden" in values:
        config.show_hidden = values["show_hidden"].lower() in TRUE_VALUES

    if env.get("OXMARK_DB"):
        config.database = os.path.expanduser(env["OXMARK_DB"])
    if env.get("OXMARK_LOG"):
        config.log_file = os.path.expanduser(env["OXMARK_LOG"])
    if env.get("EDITOR"):
        config.editor = env["EDITOR"]
    return config
