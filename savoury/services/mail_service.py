"""Outbound mail for the contact form."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from savoury.exceptions import SavouryError

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP-over-SSL sender. Each send opens its own connection in a worker thread."""

    def __init__(self, host: str, port: int, username: str, password: str, support_address: str):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._support_address = support_address

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password)

    def build_contact_message(self, name: str, email: str, subject: str, message: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._username
        msg["To"] = self._support_address
        msg["Reply-To"] = email
        msg["Subject"] = f"[Savoury contact] {subject or 'New message'}"
        msg.set_content(f"From: {name} <{email}>\n\n{message}")
        return msg

    async def send_contact_message(self, name: str, email: str, subject: str, message: str) -> None:
        if not self.configured:
            raise SavouryError("Mail transport is not configured")
        msg = self.build_contact_message(name, email, subject, message)
        await asyncio.to_thread(self._send, msg)
        logger.info("Contact message from %s forwarded to %s", email, self._support_address)

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP_SSL(self._host, self._port) as smtp:
            smtp.login(self._username, self._password)
            smtp.send_message(msg)
