from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Wafir Bridge"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"  # Environment: "dev", "staging", "prod"

    # Public URL of the bridge, used to build the OAuth redirect URI
    BASE_URL: str = "http://localhost:3000"
    CORS_ALLOWED_ORIGINS: List[str] = ["*"]

    # GitHub App
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_APP_ID: Optional[str] = None
    GITHUB_PRIVATE_KEY: Optional[str] = None  # PEM string or path to a PEM file

    # GitHub OAuth (user tokens for installations)
    GITHUB_CLIENT_ID: Optional[str] = None
    GITHUB_CLIENT_SECRET: Optional[str] = None
    OAUTH_SCOPES: List[str] = ["read:user", "project"]
    OAUTH_DEFAULT_RETURN_URL: str = "http://localhost:4321/connect"

    # Wafir config lookup
    WAFIR_CONFIG_PATH: str = ".github/wafir.yaml"

    # Submissions
    SUBMIT_MAX_SCREENSHOT_BYTES: int = 10_000_000  # 10MB
    SUBMIT_DEFAULT_LABELS: List[str] = ["wafir-feedback"]

    # Screenshot storage (S3)
    S3_BUCKET_NAME: Optional[str] = None
    AWS_REGION: Optional[str] = None

    def github_app_configured(self) -> bool:
        return bool(self.GITHUB_APP_ID and self.GITHUB_PRIVATE_KEY)

    def oauth_configured(self) -> bool:
        return bool(self.GITHUB_CLIENT_ID and self.GITHUB_CLIENT_SECRET)

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
