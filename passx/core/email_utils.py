from pydantic import ValidationError
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from passx.core.config import settings
from passx.core.logging_config import get_logger
from passx.utils.helpers import mask_email

logger = get_logger(__name__)


class EmailManager:
    def __init__(self):
        # Check if email is configured
        if not settings.MAIL_USERNAME or not settings.MAIL_FROM:
            self.conf = None
            self.fm = None
            logger.warning("Email not configured. Email features will be disabled.")
            return

        try:
            self.conf = ConnectionConfig(
                MAIL_USERNAME=settings.MAIL_USERNAME,
                MAIL_PASSWORD=settings.MAIL_PASSWORD,
                MAIL_FROM=settings.MAIL_FROM,
                MAIL_PORT=settings.MAIL_PORT,
                MAIL_SERVER=settings.MAIL_SERVER,
                MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
                MAIL_STARTTLS=settings.MAIL_STARTTLS,
                MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
                USE_CREDENTIALS=settings.USE_CREDENTIALS,
                VALIDATE_CERTS=settings.VALIDATE_CERTS,
            )
            self.fm = FastMail(self.conf)
        except ValidationError as e:
            self.conf = None
            self.fm = None
            logger.warning(f"Email configuration error: {e}. Email features will be disabled.")

    @property
    def is_configured(self) -> bool:
        return self.fm is not None

    async def send_html(self, email: str, subject: str, html_content: str) -> bool:
        """Send an HTML message. Returns False when delivery failed."""
        if not self.fm:
            logger.info(f"Email not configured. Would send '{subject}' to {mask_email(email)}")
            return True  # Return True for development without email

        message = MessageSchema(
            subject=subject,
            recipients=[email],
            body=html_content,
            subtype=MessageType.html,
        )

        try:
            await self.fm.send_message(message)
        except Exception:
            logger.exception(f"Failed to send '{subject}' to {mask_email(email)}")
            return False
        return True


# Global email manager instance
email_manager = EmailManager()
