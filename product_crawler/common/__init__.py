# Common utilities
from .config_loader import CrawlerSettings, load_config, load_settings
from .log_config import setup_logging
from .text_utils import collapse_whitespace, prepare_llm_input
from .timing import measure_time
from .url_utils import filter_links, hostname_of, is_valid_url
