from typing import Optional
from urllib.parse import urlencode

from passx.core.config import settings
from passx.core.email_utils import EmailManager, email_manager
from passx.core.logging_config import get_logger
from passx.utils.helpers import mask_email

logger = get_logger(__name__)


class ResetPasswordMailingService:
    subject = "[PassX] Reset Password"

    def __init__(self, manager: EmailManager = email_manager, frontend_url: Optional[str] = None):
        self.manager = manager
        self.frontend_url = (frontend_url or settings.FRONTEND_URL).rstrip("/")

    def build_link(self, email: str, code: str) -> str:
        return f"{self.frontend_url}/link/reset-password?{urlencode({'code': code, 'email': email})}"

    def render(self, link: str) -> str:
        return f"""
        <html>
            <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
                <div style="background-color: #f8f9fa; padding: 20px; border-radius: 10px;">
                    <h2 style="color: #333; text-align: center;">PassX - Reset Password</h2>
                    <div style="background-color: white; padding: 30px; border-radius: 8px; margin: 20px 0;">
                        <p>You requested to reset your password. Click the button below to choose a new one:</p>
                        <div style="text-align: center; margin: 30px 0;">
                            <a href="{link}"
                               style="background-color: #dc3545; color: white; padding: 15px 30px;
                                      text-decoration: none; border-radius: 8px; font-weight: bold;
                                      display: inline-block;">
                                Reset Password
                            </a>
                        </div>
                        <p>This link will expire in {settings.CODE_EXPIRE_MINUTES} minutes.</p>
                        <p>If you didn't request this, please ignore this email.</p>
                        <p style="font-size: 12px; color: #666;">
                            If the button doesn't work, copy and paste this link: {link}
                        </p>
                    </div>
                </div>
            </body>
        </html>
        """

    async def send(self, email: str, code: str) -> bool:
        """Send the reset-password link for ``code`` to ``email``."""
        sent = await self.manager.send_html(
            email=email,
            subject=self.subject,
            html_content=self.render(self.build_link(email, code)),
        )
        if not sent:
            logger.warning(f"Reset password mail could not be delivered to {mask_email(email)}")
        return sent
