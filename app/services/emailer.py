from __future__ import annotations

import time
from typing import List, Optional

import httpx

from app.core.config import AppConfig
from app.core.errors import EmailConfigurationError, EmailDeliveryError


class Emailer:
    driver: str

    def send(self, subject: str, html: str, recipients: List[str], sender: str, plaintext: Optional[str] = None) -> Optional[str]:
        raise NotImplementedError


class ConsoleEmailer(Emailer):
    driver = "console"

    def __init__(self, include_plaintext: bool = True):
        self.include_plaintext = include_plaintext

    def send(self, subject: str, html: str, recipients: List[str], sender: str, plaintext: Optional[str] = None) -> Optional[str]:
        # Simulate a send. Avoid printing full HTML in logs.
        preview_len = min(len(html), 200)
        print(f"[console-email] from={sender} to={','.join(recipients)} subject={subject} html_preview={html[:preview_len]!r}...")

        if plaintext and self.include_plaintext:
            plaintext_preview_len = min(len(plaintext), 200)
            print(f"[console-email] plaintext_preview={plaintext[:plaintext_preview_len]!r}...")

        # Return synthetic message id for local debugging
        return f"MSG-LOCAL-{int(time.time()*1000)}"


class SmtpEmailer(Emailer):
    driver = "smtp"

    def __init__(self, host: str, port: int, username: str, password: str, use_tls: bool, include_plaintext: bool = True):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.include_plaintext = include_plaintext

    def send(self, subject: str, html: str, recipients: List[str], sender: str, plaintext: Optional[str] = None) -> Optional[str]:
        import smtplib
        from email.mime.multipart import MIMEMultipart
        from email.mime.text import MIMEText
        from email.utils import make_msgid

        if plaintext and self.include_plaintext:
            # Multipart/alternative message
            message = MIMEMultipart("alternative")
            message.attach(MIMEText(plaintext, "plain", "utf-8"))
            message.attach(MIMEText(html, "html", "utf-8"))
        else:
            message = MIMEText(html, "html", "utf-8")
        message["Subject"] = subject
        message["From"] = sender
        message["To"] = ", ".join(recipients)
        message_id = make_msgid()
        message["Message-ID"] = message_id

        try:
            server = smtplib.SMTP(self.host, self.port)
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.sendmail(sender, recipients, message.as_string())
            server.quit()
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(f"SMTP send failed: {exc}") from exc
        return message_id


class SendgridEmailer(Emailer):
    driver = "sendgrid"

    def __init__(self, api_key: str, include_plaintext: bool = True):
        self.api_key = api_key
        self.include_plaintext = include_plaintext

    def send(self, subject: str, html: str, recipients: List[str], sender: str, plaintext: Optional[str] = None) -> Optional[str]:
        url = "https://api.sendgrid.com/v3/mail/send"
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        # Build content array
        content = [{"type": "text/html", "value": html}]
        if plaintext and self.include_plaintext:
            content.insert(0, {"type": "text/plain", "value": plaintext})

        data = {
            "personalizations": [{"to": [{"email": r} for r in recipients]}],
            "from": {"email": sender},
            "subject": subject,
            "content": content,
        }
        try:
            with httpx.Client(timeout=15) as client:
                resp = client.post(url, headers=headers, json=data)
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"SendGrid request failed: {exc}") from exc
        if resp.status_code not in (200, 202):
            raise EmailDeliveryError(f"SendGrid send failed: {resp.status_code} {resp.text}")
        return resp.headers.get("X-Message-Id") or None


def select_emailer(config: AppConfig) -> Emailer:
    driver = config.mail_driver
    if driver == "console":
        return ConsoleEmailer(include_plaintext=config.include_plaintext)
    if driver == "smtp":
        if not config.smtp_host or not config.smtp_port:
            raise EmailConfigurationError("SMTP configuration missing: SMTP_HOST/SMTP_PORT required")
        return SmtpEmailer(
            host=config.smtp_host,
            port=config.smtp_port,
            username=config.smtp_username or "",
            password=config.smtp_password or "",
            use_tls=config.smtp_use_tls,
            include_plaintext=config.include_plaintext,
        )
    if driver == "sendgrid":
        if not config.sendgrid_api_key:
            raise EmailConfigurationError("SENDGRID_API_KEY missing")
        return SendgridEmailer(api_key=config.sendgrid_api_key, include_plaintext=config.include_plaintext)
    raise EmailConfigurationError(f"Unsupported MAIL_DRIVER: {driver}")
