"""
Configuration Loader

Loads the YAML crawler configuration and merges it with environment
variables (API key, runtime environment) into a single settings object
that is created once per process and passed to the components that need it.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_FILE = 'crawler.yaml'


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file from the config directory.

    Args:
        filename: Name of the config file (e.g., 'crawler.yaml')

    Returns:
        Parsed YAML content as dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename
    return _read_yaml(config_path)


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


@dataclass
class CrawlerSettings:
    """
    Runtime settings for one crawler process.

    Field Groups:
    - Environment: API key and runtime environment name
    - Browser: launch and page-load behaviour
    - Extraction: models and input budget for the LLM calls
    - Verification: image HEAD request limits
    - Output: where result files go
    """

    # Environment
    openai_api_key: str = ""
    environment: str = "production"

    # Browser
    headless: Optional[bool] = None     # None = headless unless development
    viewport_width: int = 1366
    viewport_height: int = 768
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/136.0.0.0 Safari/537.36"
    )
    locale: str = "en-US"
    timezone_id: str = "America/New_York"
    launch_args: List[str] = field(default_factory=list)
    navigation_timeout: float = 30.0    # seconds
    network_idle_timeout: float = 5.0   # seconds, soft
    dev_linger_seconds: float = 5.0

    # Extraction
    price_model: str = "gpt-4.1-mini"
    image_model: str = "gpt-4.1-nano"
    max_input_chars: int = 1_000_000

    # Verification
    verify_timeout: float = 10.0        # seconds per HEAD request
    max_verify_workers: Optional[int] = None    # None = one thread per candidate

    # Output
    output_dir: str = "output"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def run_headless(self) -> bool:
        if self.headless is not None:
            return self.headless
        return not self.is_development

    def __post_init__(self):
        """Validate numeric limits after initialization."""
        if self.max_input_chars <= 0:
            raise ValueError("max_input_chars must be positive")
        if self.max_verify_workers is not None and self.max_verify_workers <= 0:
            raise ValueError("max_verify_workers must be positive")
        if self.verify_timeout <= 0:
            raise ValueError("verify_timeout must be positive")
        if self.network_idle_timeout < 0:
            raise ValueError("network_idle_timeout must not be negative")


def _flatten_sections(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten the sectioned YAML layout into CrawlerSettings keyword arguments.

    Example:
        {'browser': {'viewport': {'width': 1280}}, 'output': {'dir': 'out'}}
        -> {'viewport_width': 1280, 'output_dir': 'out'}
    """
    browser = dict(config.get('browser') or {})
    extraction = config.get('extraction') or {}
    verification = config.get('verification') or {}
    output = config.get('output') or {}

    values: Dict[str, Any] = {}

    viewport = browser.pop('viewport', None) or {}
    if 'width' in viewport:
        values['viewport_width'] = viewport['width']
    if 'height' in viewport:
        values['viewport_height'] = viewport['height']
    values.update(browser)

    values.update(extraction)
    values.update(verification)
    if 'dir' in output:
        values['output_dir'] = output['dir']

    known = {f.name for f in fields(CrawlerSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return values


def load_settings(config_path: Optional[str] = None) -> CrawlerSettings:
    """
    Build CrawlerSettings from YAML config and environment variables.

    Args:
        config_path: Explicit YAML path (default: config/crawler.yaml)

    Returns:
        Populated CrawlerSettings

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config contains unknown keys or invalid limits
    """
    if config_path:
        config = _read_yaml(Path(config_path))
    else:
        config = load_config(DEFAULT_CONFIG_FILE)

    values = _flatten_sections(config)
    values['openai_api_key'] = os.environ.get("OPENAI_API_KEY", "")
    values['environment'] = os.environ.get("APP_ENV", "production")

    return CrawlerSettings(**values)
