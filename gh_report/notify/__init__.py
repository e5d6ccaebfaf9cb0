"""Email notifications for alerts."""

from .config import MailConfig
from .mailer import Mailer

__all__ = ["MailConfig", "Mailer"]
