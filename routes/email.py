import logging
from flask_mail import Message
from flask import current_app, render_template
from extensions import mail

logger = logging.getLogger(__name__)

def send_email(to, subject, template, **kwargs):
    """Send a templated mail. Delivery failures are logged, never raised."""
    app = current_app._get_current_object()
    msg = Message(
        subject,
        sender=app.config['MAIL_DEFAULT_SENDER'],
        recipients=[to]
    )
    msg.body = render_template(template + '.txt', **kwargs)
    msg.html = render_template(template + '.html', **kwargs)
    try:
        mail.send(msg)
        logger.info("Email sent to %s: %s", to, subject)
        return True
    except Exception:
        logger.exception("Error sending email to %s", to)
        return False
