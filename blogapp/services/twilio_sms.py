"""Twilio SMS delivery for phone verification codes.

The blog generates and checks its own codes; Twilio is only used to
deliver the message text.
"""

import logging
from flask import current_app
from twilio.rest import Client
from twilio.base.exceptions import TwilioRestException
from blogapp.errors import UpstreamFailure

logger = logging.getLogger(__name__)


def get_twilio_client():
    """Get Twilio client instance."""
    sid = current_app.config.get('TWILIO_ACCOUNT_SID')
    token = current_app.config.get('TWILIO_AUTH_TOKEN')
    if not sid or not token:
        raise UpstreamFailure('SMS service not configured')

    return Client(sid, token)


def normalize_phone_number(phone: str) -> str:
    """Normalize phone number to E.164 format.

    Args:
        phone: Phone number in any format

    Returns:
        Phone number in E.164 format (e.g., '+15551234567'), or None
    """
    if not isinstance(phone, str) or not phone:
        return None

    phone = phone.strip()
    # Remove all non-digit characters except a leading +
    cleaned = ''.join(c for i, c in enumerate(phone) if c.isdigit() or (c == '+' and i == 0))

    if not cleaned.startswith('+'):
        # Local 10-digit numbers get the default country code
        if len(cleaned) == 10:
            cleaned = current_app.config.get('DEFAULT_COUNTRY_CODE', '+1') + cleaned
        else:
            cleaned = '+' + cleaned

    if len(cleaned) < 10 or len(cleaned) > 16:
        return None

    return cleaned


def send_sms(phone: str, body: str) -> None:
    """Send ``body`` to ``phone`` (E.164) via the Twilio Messages API.

    Raises:
        UpstreamFailure: Twilio is not configured or rejected the message
    """
    from_number = current_app.config.get('TWILIO_FROM_NUMBER')
    if not from_number:
        raise UpstreamFailure('SMS service not configured')

    client = get_twilio_client()

    try:
        message = client.messages.create(to=phone, from_=from_number, body=body)
    except TwilioRestException as e:
        logger.error(f"Twilio error sending SMS to {phone}: {e}")
        if e.code == 21211:
            raise UpstreamFailure('Invalid phone number') from e
        elif e.code == 21408:
            raise UpstreamFailure('SMS not supported for this phone number') from e
        raise UpstreamFailure('Failed to send verification code') from e

    logger.info(f"SMS sent to {phone}, status: {message.status}")
