"""Document root discovery and configuration loading."""

import logging
from pathlib import Path
from typing import Optional
import yaml

from veisku.constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME
from veisku.data_models import DocumentRoot, RootConfiguration
from veisku.errors import ConfigurationError

logger = logging.getLogger(__name__)


def find_config_base(start: Path) -> Path:
    """Return the nearest directory at or above ``start`` holding ``.veisku/``.

    Falls back to ``start`` itself when no ancestor carries a configuration
    directory.
    """
    for directory in (start, *start.parents):
        if (directory / CONFIG_DIR_NAME).is_dir():
            logger.debug("Found %s in %s; using it as the configuration base", CONFIG_DIR_NAME, directory)
            return directory

    logger.debug("Could not locate a %s directory; using %s as the document root", CONFIG_DIR_NAME, start)
    return start


def load_root_configuration(config_path: Path) -> RootConfiguration:
    """Load and validate a document root configuration file.

    Args:
        config_path: Path to the YAML configuration file. A missing file yields
            the default configuration.

    Returns:
        The parsed :class:`RootConfiguration`.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML, or does
            not provide the expected structure.
    """
    if not config_path.exists():
        logger.debug("%s doesn't exist; using the default configuration", config_path)
        return RootConfiguration()

    try:
        raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {config_path}: {exc}") from exc

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Configuration {config_path} must be a mapping")

    defaults = RootConfiguration()

    root = raw_config.get("root", defaults.root)
    if root is None:
        root = defaults.root
    if not isinstance(root, str):
        raise ConfigurationError("Configuration key 'root' must be a string")

    files = raw_config.get("files", list(defaults.files))
    if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
        raise ConfigurationError("Configuration key 'files' must be a list of strings")

    return RootConfiguration(root=root, files=tuple(files))


def discover_document_root(start: Optional[Path] = None) -> DocumentRoot:
    """Locate the document root for ``start`` and read its configuration.

    Args:
        start: Directory to begin the upward search from. Defaults to the
            current working directory.

    Returns:
        A :class:`DocumentRoot` with a canonical path.

    Raises:
        ConfigurationError: If the configuration is invalid or the configured
            root directory does not exist.
    """
    start = (start or Path.cwd()).expanduser()
    base = find_config_base(start.resolve(strict=False))
    configuration = load_root_configuration(base / CONFIG_DIR_NAME / CONFIG_FILE_NAME)

    candidate = base / configuration.root
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise ConfigurationError(f"Failed to canonicalize the document root {candidate}") from exc

    if not resolved.is_dir():
        raise ConfigurationError(f"Document root {resolved} is not a directory")

    root = DocumentRoot(path=resolved, files=configuration.files)
    logger.debug("root = %r", root)
    return root
