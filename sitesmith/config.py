from pathlib import Path
from typing import Optional

import yaml           # pip install pyyaml

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "config.yml"


def normalize_extension(ext) -> str:
    """'md' and '.md' both become '.md'."""
    ext = str(ext).strip()
    if not ext:
        raise ConfigError("Empty file extension in config")
    return ext if ext.startswith(".") else f".{ext}"


def get_config_path_from_args(argv) -> Optional[Path]:
    """
    Determine which config file to use.

    - If a path is passed as first argument, use that.
    - Otherwise use ./config.yml when it exists, or no file at all.
    """
    if len(argv) > 1:
        return Path(argv[1]).resolve()
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    if default.exists():
        return default
    return None


def load_config(config_path: Optional[Path] = None) -> dict:
    """
    Load YAML config and apply defaults.

    source/destination are resolved against the directory holding the config
    file (or the current directory when there is none).
    """
    if config_path is None:
        data = {}
        base_dir = Path.cwd()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Failed to read {config_path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        base_dir = config_path.resolve().parent

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    # template_extensions can be a string or a list
    extensions = data.get("template_extensions", ["tpl", "md"])
    if isinstance(extensions, str):
        extensions = [extensions]
    elif not isinstance(extensions, list):
        raise ConfigError("template_extensions must be a string or a list")

    workers = data.get("workers")
    if workers is not None:
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigError(f"workers must be a positive integer, got {workers!r}")

    cfg = {
        "source": (base_dir / str(data.get("source", "."))).resolve(),
        "destination": (base_dir / str(data.get("destination", "_site"))).resolve(),
        "layouts": str(data.get("layouts", "_layouts")),
        "posts": str(data.get("posts", "_posts")),
        "template_extensions": tuple(normalize_extension(e) for e in extensions),
        "markdown_extension": normalize_extension(data.get("markdown_extension", "md")),
        # a document without "extends" uses this layout if it exists
        "default_layout": data.get("default_layout", "default.tpl"),
        "workers": workers,
    }
    return cfg
