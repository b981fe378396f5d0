"""
Email Service
Handles sending emails for booking notifications
"""

from flask import current_app
from flask_mail import Message
from extensions import mail


def _booking_summary(booking):
    if booking.type.value == 'stay':
        return (
            f"<li><strong>Check-in:</strong> {booking.check_in.strftime('%B %d, %Y')}</li>"
            f"<li><strong>Check-out:</strong> {booking.check_out.strftime('%B %d, %Y')}</li>"
            f"<li><strong>Guests:</strong> {booking.guests}</li>"
        )
    time = f" at {booking.time}" if booking.time else ""
    return f"<li><strong>Viewing:</strong> {booking.date.strftime('%B %d, %Y')}{time}</li>"


class EmailService:
    """Service for sending emails"""

    @staticmethod
    def send_email(to, subject, html_body, text_body=None):
        """Send an email"""
        try:
            msg = Message(
                subject=subject,
                recipients=[to] if isinstance(to, str) else to,
                html=html_body,
                body=text_body or html_body
            )
            mail.send(msg)
            return True
        except Exception as e:
            current_app.logger.error(f'Failed to send email to {to}: {str(e)}')
            return False

    @staticmethod
    def send_booking_received(booking, user):
        """Acknowledge a new booking request to the guest and the property manager"""
        kind = 'stay' if booking.type.value == 'stay' else 'viewing'
        subject = f"We received your {kind} request - {booking.property_name}"
        html_body = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2>Thank you, {user.name}!</h2>
                <p>Your {kind} request for <strong>{booking.property_name}</strong> is pending confirmation.</p>
                <ul>{_booking_summary(booking)}</ul>
                <p>Reference: #{booking.id}</p>
                <hr style="border: none; border-top: 1px solid #eee; margin: 20px 0;">
                <p style="color: #999; font-size: 12px;">
                    This is an automated message. Please do not reply to this email.
                </p>
            </div>
        </body>
        </html>
        """
        sent = EmailService.send_email(user.email, subject, html_body)

        manager = current_app.config.get('ADMIN_NOTIFICATION_EMAIL')
        if manager:
            EmailService.send_email(
                manager,
                f"New {kind} request #{booking.id}",
                f"<p>{user.name} ({user.email}) requested a {kind}.</p><ul>{_booking_summary(booking)}</ul>"
            )
        return sent

    @staticmethod
    def send_booking_status_update(booking, user):
        """Tell the guest their booking status changed"""
        subject = f"Your booking is now {booking.status.value} - {booking.property_name}"
        html_body = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2>Booking {booking.status.value}</h2>
                <p>Hi {user.name},</p>
                <p>Booking #{booking.id} at <strong>{booking.property_name}</strong> is now
                   <strong>{booking.status.value}</strong>.</p>
                <ul>{_booking_summary(booking)}</ul>
                <a href="{current_app.config.get('FRONTEND_URL', 'http://localhost:3000')}/bookings">View my bookings</a>
            </div>
        </body>
        </html>
        """
        return EmailService.send_email(user.email, subject, html_body)
