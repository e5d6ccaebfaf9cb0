"""Configuration for SMTP email delivery."""

import os


class MailConfig:
    """Configuration class for SMTP delivery of alert emails."""

    def __init__(self) -> None:
        """Initialize mail configuration from environment variables."""
        self.host: str = os.getenv("GH_REPORT_SMTP_HOST", "localhost")
        self.port: int = int(os.getenv("GH_REPORT_SMTP_PORT", "25"))
        self.user: str | None = os.getenv("GH_REPORT_SMTP_USER")
        self.password: str | None = os.getenv("GH_REPORT_SMTP_PASSWORD")
        self.from_addr: str | None = os.getenv("GH_REPORT_SMTP_FROM") or self.user
        self.starttls: bool = (
            os.getenv("GH_REPORT_SMTP_STARTTLS", "false").lower() in ("1", "true", "yes")
        )

    def is_configured(self) -> bool:
        """Check if a sender address is available."""
        return bool(self.from_addr)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.from_addr:
            raise ValueError(
                "GH_REPORT_SMTP_FROM (or GH_REPORT_SMTP_USER) environment variable "
                "is required for sending alert emails"
            )
