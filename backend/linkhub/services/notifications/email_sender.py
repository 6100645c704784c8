import smtplib
from email.mime.text import MIMEText

from linkhub.core.config import settings
from linkhub.core.logging import get_logger

logger = get_logger('notifications.email')


class EmailNotifier:
    def __init__(self) -> None:
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.smtp_username
        self.password = settings.smtp_password
        self.sender = settings.email_from

    def send(self, to_email: str, subject: str, body: str) -> bool:
        if not self.host:
            logger.warning('SMTP is not configured, dropping email "%s" to %s', subject, to_email)
            return False

        msg = MIMEText(body)
        msg['Subject'] = subject
        msg['From'] = self.sender
        msg['To'] = to_email

        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.sender, [to_email], msg.as_string())
        return True
