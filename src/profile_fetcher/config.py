"""
Configuration constants for the Profile Fetcher.

This module centralizes all configurable parameters to make the client,
renderer and demo servers easy to tune and adapt to different environments.
"""

from pathlib import Path
from dataclasses import dataclass, field


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = "https://jsonplaceholder.typicode.com"
    users_endpoint: str = "/users"
    posts_endpoint: str = "/posts"
    timeout_seconds: float = 10.0

    # Simulated latency of the post count step
    count_delay_seconds: float = 2.0

    # Per-user resources reachable with ?userId=
    user_resources: tuple = ("posts", "albums", "todos")


@dataclass
class RenderConfig:
    """Output rendering configuration."""
    max_recent_posts: int = 5
    max_search_results: int = 10

    # Valid user id range when input validation is requested
    min_user_id: int = 1
    max_user_id: int = 10


@dataclass
class ServerConfig:
    """Demo HTTP server configuration."""
    host: str = "localhost"
    port: int = 3000
    index_file: str = "/index.html"
    static_directory: Path = field(default_factory=lambda: Path("public"))


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "profile_fetcher.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
