"""HTML bodies for outbound email."""

from datetime import date
from html import escape
from typing import Optional, Tuple

from ojt_tracker.utils.constants import method_display_name

_WRAPPER = '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;">{content}</div>'

_BUTTON = (
    '<p><a href="{url}" style="display: inline-block; padding: 10px 20px; '
    'background-color: {color}; color: white; text-decoration: none; border-radius: 4px;">{label}</a></p>'
    "<p>Or copy and paste this URL into your browser:</p><p>{url}</p>"
)


def format_date(value: date) -> str:
    return value.strftime("%m/%d/%Y")


def _button(url: str, label: str, color: str) -> str:
    return _BUTTON.format(url=escape(url, quote=True), label=label, color=color)


def _entry_block(entry_date: date, location: str, method: str, hours: float) -> str:
    return (
        '<div style="background-color: #f4f4f4; padding: 15px; border-radius: 4px; margin: 20px 0;">'
        f"<p><strong>Date:</strong> {format_date(entry_date)}</p>"
        f"<p><strong>Location:</strong> {escape(location)}</p>"
        f"<p><strong>Method:</strong> {escape(method_display_name(method))}</p>"
        f"<p><strong>Hours:</strong> {hours:g}</p>"
        "</div>"
    )


def verification_request_email(
    technician_name: Optional[str],
    employee_number: Optional[str],
    entry,
    verification_url: str,
) -> Tuple[str, str]:
    """Message asking a supervisor to verify an entry. Returns (subject, html)."""
    name = technician_name or "A technician"
    employee = f" (Employee #: {escape(employee_number)})" if employee_number else ""
    subject = f"Verification Request for OJT Hours from {name}"
    content = (
        "<h2>OJT Hours Verification Request</h2>"
        f"<p>{escape(name)}{employee} has requested your verification for the following OJT hours:</p>"
        + _entry_block(entry.date, entry.location, entry.method, entry.hours)
        + "<p>Please click the button below to verify these hours:</p>"
        + _button(verification_url, "Verify Hours", "#42be65")
    )
    return subject, _WRAPPER.format(content=content)


def verification_confirmation_email(entry, verifier_name: str) -> Tuple[str, str]:
    """Message telling the technician an entry was verified."""
    subject = "OJT Hours Verified"
    content = (
        "<h2>Your OJT Hours Have Been Verified</h2>"
        f"<p>Great news! {escape(verifier_name)} has verified your OJT hours.</p>"
        + _entry_block(entry.date, entry.location, entry.method, entry.hours)
        + "<p>These hours have been added to your verified OJT log.</p>"
    )
    return subject, _WRAPPER.format(content=content)


def password_reset_email(reset_url: str, expire_minutes: int) -> Tuple[str, str]:
    subject = "Reset your OJT Hours Tracker password"
    content = (
        "<h2>OJT Hours Tracker - Password Reset</h2>"
        "<p>You recently requested to reset your password. Click the button below to reset it:</p>"
        + _button(reset_url, "Reset Password", "#42be65")
        + f"<p>This link will expire in {expire_minutes} minutes. "
        "If you did not request a password reset, you can safely ignore this email.</p>"
    )
    return subject, _WRAPPER.format(content=content)


def magic_link_email(login_url: str, expire_minutes: int) -> Tuple[str, str]:
    subject = "Your OJT Hours Tracker Login Link"
    content = (
        "<h2>OJT Hours Tracker - Magic Link</h2>"
        "<p>Click the button below to log in to your account:</p>"
        + _button(login_url, "Log In", "#1a73e8")
        + f"<p>This link will expire in {expire_minutes} minutes.</p>"
    )
    return subject, _WRAPPER.format(content=content)
