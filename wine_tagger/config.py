"""
Configuration Manager Module
Handles loading and accessing application configuration
"""
import os
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

from .errors import ConfigError

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class Config:
    """Configuration manager for the wine auto-tagger"""

    def __init__(self, config_file=None):
        """
        Initialize configuration

        Args:
            config_file: Path to .env configuration file
        """
        if config_file:
            load_dotenv(config_file)
        else:
            # Try to load from default locations
            base_dir = Path(__file__).parent.parent
            config_path = base_dir / 'config.env'
            if config_path.exists():
                load_dotenv(config_path)

        # Inventory API Configuration
        self.inventory_api_url = os.getenv('INVENTORY_API_URL', 'http://localhost:8080/api').rstrip('/')
        self.inventory_api_timeout = float(os.getenv('INVENTORY_API_TIMEOUT', 15))
        self.inventory_api_token = os.getenv('INVENTORY_API_TOKEN', '')

        # Batch Processing Configuration
        self.parallel_processing = os.getenv('PARALLEL_PROCESSING', 'false').lower() == 'true'
        self.max_workers = int(os.getenv('MAX_WORKERS', 4))

        # Output Configuration
        self.output_dir = Path(os.getenv('OUTPUT_DIR', './output'))
        self.logs_dir = Path(os.getenv('LOGS_DIR', './logs'))

        # Logging Configuration
        self.log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.verbose_logging = os.getenv('VERBOSE_LOGGING', 'false').lower() == 'true'

        # Create necessary directories
        self._create_directories()

    def _create_directories(self):
        """Create necessary directories if they don't exist"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def validate(self):
        """
        Validate configuration

        Returns:
            tuple: (is_valid, error_message)
        """
        errors = []

        parsed = urlparse(self.inventory_api_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            errors.append("INVENTORY_API_URL must be an http(s) URL")

        if self.inventory_api_timeout <= 0:
            errors.append("INVENTORY_API_TIMEOUT must be positive")

        if self.max_workers <= 0:
            errors.append("MAX_WORKERS must be a positive integer")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        if errors:
            return False, "; ".join(errors)

        return True, ""

    def ensure_valid(self):
        """Raise ConfigError if validation fails"""
        is_valid, message = self.validate()
        if not is_valid:
            raise ConfigError(message)

    def get_api_config(self):
        """Get inventory API configuration as a dictionary"""
        return {
            'base_url': self.inventory_api_url,
            'timeout': self.inventory_api_timeout,
            'token': self.inventory_api_token
        }
