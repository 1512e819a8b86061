"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment, build_settings, DEFAULT_JWT_SECRET

logger = logging.getLogger(__name__)

# Secrets shipped in defaults and sample files
PLACEHOLDER_JWT_SECRETS = {DEFAULT_JWT_SECRET, "change-me"}


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file = Path(f".env.{env.value}")

        if env_file.exists():
            return build_settings(str(env_file), environment=env)

        logger.warning(f"Environment file {env_file} not found, using default settings")
        return build_settings(".env", environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            if env_file.name.endswith(".sample"):
                continue
            env_files.append(env_file.name.replace(".env.", ""))
        return sorted(env_files)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            env = Environment(environment.lower())
        except ValueError:
            return False

        if not Path(f".env.{env.value}").exists():
            return False

        settings = ConfigLoader.load_environment_config(env.value)
        required_settings = [
            settings.app_name,
            settings.environment,
            settings.host,
            settings.port,
            settings.database.url,
        ]
        if not all(setting is not None for setting in required_settings):
            return False

        if settings.is_production() and settings.security.jwt_secret in PLACEHOLDER_JWT_SECRETS:
            logger.error("Production configuration still uses a placeholder JWT secret")
            return False
        return True

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={defaults.host}
PORT={defaults.port}
RELOAD={'true' if env == Environment.DEVELOPMENT else 'false'}
WORKERS={1 if env == Environment.DEVELOPMENT else 4}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_JSON={'false' if env == Environment.DEVELOPMENT else 'true'}

# Database Configuration
DATABASE_URL={defaults.database.url}

# Redis Configuration
REDIS_ENABLED={'false' if env == Environment.DEVELOPMENT else 'true'}
REDIS_HOST={defaults.redis.host}
REDIS_PORT={defaults.redis.port}
REDIS_CACHE_TTL_SECONDS={defaults.redis.cache_ttl_seconds}

# Security Configuration
SECURITY_JWT_SECRET=change-me
SECURITY_CORS_ORIGINS=*

# Dictionary Configuration
DICTIONARY_ADMIN_PAGE_SIZE={defaults.dictionary.admin_page_size}
DICTIONARY_NEO_REJECTION_THRESHOLD={defaults.dictionary.neo_rejection_threshold}
DICTIONARY_ENGLISH_LANGUAGE_CODE={defaults.dictionary.english_language_code}
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
