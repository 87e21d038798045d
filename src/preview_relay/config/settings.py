"""Application settings loaded from environment variables."""

from urllib.parse import urlparse

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables prefixed with PREVIEW_.
    For example, PREVIEW_BASE_URL=https://example.com sets base_url.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PREVIEW_",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Server Settings ─────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (comma-separated origins or "*")
    cors_origins: str = "*"

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as a list (parsed from comma-separated string)."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ─── Links ───────────────────────────────────────────────────────
    # Public base URL of this service, used only for links back to itself
    base_url: str = "https://substack.lol"
    # Upstream host serving the original posts
    upstream_base_url: str = "https://open.substack.com"

    def get_base_url(self) -> str:
        """Return the public base URL without a trailing slash."""
        return self.base_url.rstrip("/")

    def get_upstream_base_url(self) -> str:
        """Return the upstream base URL without a trailing slash."""
        return self.upstream_base_url.rstrip("/")

    def get_upstream_host(self) -> str:
        """Return the hostname of the upstream base URL."""
        return (urlparse(self.upstream_base_url).hostname or "").lower()

    # ─── Upstream Fetch Settings ─────────────────────────────────────
    # Crawler-like identity so the upstream renders its full preview markup
    fetch_user_agent: str = "Mozilla/5.0 (compatible; Twitterbot/1.0)"
    fetch_timeout_seconds: float = 10.0
    max_connections: int = 100
    max_keepalive_connections: int = 20

    # ─── SSL/TLS Settings ───────────────────────────────────────────
    # Path to corporate CA certificate bundle (PEM format)
    ssl_cert_dir: str | None = None
    # Path to a specific CA certificate file (alternative to ssl_cert_dir)
    ssl_ca_bundle: str | None = None
    # Disable SSL verification (NOT recommended for production)
    ssl_verify: bool = True

    def get_ssl_context(self) -> bool | str:
        """
        Get SSL verification configuration for httpx.

        Returns:
            - False if ssl_verify is disabled
            - Path to CA bundle/cert dir if configured
            - True for default SSL verification

        Priority: ssl_verify=False > ssl_ca_bundle > ssl_cert_dir > True
        """
        if not self.ssl_verify:
            return False
        if self.ssl_ca_bundle:
            return self.ssl_ca_bundle
        if self.ssl_cert_dir:
            return self.ssl_cert_dir
        return True

    # ─── Document Cache Settings ─────────────────────────────────────
    cache_enabled: bool = True
    cache_ttl_seconds: int = 3600  # revalidation window for fetched posts
    cache_max_size: int = 500

    # ─── Diagnostics ─────────────────────────────────────────────────
    debug_sample_size: int = 20
    health_check_upstream: bool = False


# Global settings instance, read once at process start
settings = Settings()
